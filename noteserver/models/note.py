from pydantic import BaseModel
from typing import Optional


class Note(BaseModel):
    id: int
    title: str
    content: str = ""
    tags: str = ""
    createdAt: str
    nextReviewAt: str
    reviewStage: int = 0
    pdfPath: str = ""


class NoteIn(BaseModel):
    title: str
    content: str = ""
    tags: str = ""
    pdfPath: str = ""


class NoteUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[str] = None
    pdfPath: Optional[str] = None
