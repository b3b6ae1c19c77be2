import logging
import shutil
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from noteserver.config import Settings, settings as default_settings
from noteserver.controllers.db_controller import DatabaseController
from noteserver.models.note import Note, NoteIn, NoteUpdate
from noteserver.review import to_iso, utcnow

logger = logging.getLogger(__name__)


def _safe_name(name: str) -> str:
    return Path(name).name.replace("..", "_")


async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    # Все ошибки API отдаются как {"error": "..."}
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    for error in exc.errors():
        loc = tuple(error.get("loc", ()))
        if loc[:1] == ("path",):
            return JSONResponse(status_code=404, content={"error": "Not found"})
        if loc[-1:] == ("title",):
            return JSONResponse(status_code=400, content={"error": "Missing title"})
    return JSONResponse(status_code=400, content={"error": "Missing body"})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    db_controller = DatabaseController(settings.DB_PATH)
    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)

    app = FastAPI(title="PDF Learning Hub API")
    app.state.db = db_controller
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    @app.get("/api/notes")
    def list_notes_handler():
        return {"notes": db_controller.list_notes()}

    @app.post("/api/notes", status_code=201, response_model=Note)
    def create_note_handler(note_data: NoteIn):
        created = db_controller.insert_note(note_data)
        if not created:
            raise HTTPException(status_code=500, detail="Failed to create note")
        return created

    @app.put("/api/notes/{note_id}", response_model=Note)
    def update_note_handler(note_id: int, payload: NoteUpdate):
        existing = db_controller.read_note_by_id(note_id)
        if not existing:
            raise HTTPException(status_code=404, detail="Not found")

        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        merged = {**existing, **changes}
        return db_controller.update_note(
            note_id, merged["title"], merged["content"], merged["tags"], merged["pdfPath"]
        )

    @app.delete("/api/notes/{note_id}")
    def delete_note_handler(note_id: int):
        db_controller.delete_note(note_id)
        return {"ok": True}

    @app.post("/api/notes/{note_id}/review", response_model=Note)
    def review_note_handler(note_id: int):
        updated = db_controller.advance_review(note_id)
        if not updated:
            raise HTTPException(status_code=404, detail="Not found")
        return updated

    @app.get("/api/reviews")
    def list_reviews_handler():
        return {"notes": db_controller.list_reviews_due(to_iso(utcnow()))}

    @app.post("/api/upload", status_code=201)
    def upload_handler(file: Optional[UploadFile] = File(None)):
        if file is None or not file.filename:
            raise HTTPException(status_code=400, detail="No file uploaded")

        filename = _safe_name(file.filename)
        if not filename:
            raise HTTPException(status_code=400, detail="No file uploaded")
        target = upload_dir / filename
        with target.open("wb") as out:
            shutil.copyfileobj(file.file, out)
        logger.info("✔ Файл %s сохранен", target)
        return {"path": f"/uploads/{filename}"}

    @app.get("/uploads/{filename}")
    def uploaded_file_handler(filename: str):
        target = upload_dir / _safe_name(filename)
        if not target.is_file():
            raise HTTPException(status_code=404, detail="Not found")
        return FileResponse(path=str(target))

    return app


def main():
    uvicorn.run(create_app(), host=default_settings.HOST, port=default_settings.PORT)


if __name__ == "__main__":
    main()
