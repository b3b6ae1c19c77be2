"""Обертка над httpx для API заметок.

Один вызов -- один запрос. Ответ с ошибкой превращается в ApiError
с текстом из поля "error" тела ответа. Повторов нет.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass
class UploadedFile:
    filename: str
    content: bytes
    content_type: str = "application/pdf"


def _raise_for_error(response: httpx.Response) -> None:
    if response.is_success:
        return
    try:
        body = response.json()
    except ValueError:
        body = {"error": "Unknown error"}
    message = body.get("error") if isinstance(body, dict) else None
    raise ApiError(message or "Request failed", response.status_code)


def _note_path(note_id) -> str:
    return "/api/notes/" + quote(str(note_id), safe="")


class NotesApiClient:
    def __init__(self, http: httpx.Client):
        self.http = http

    def request_json(self, method: str, path: str, **kwargs) -> Any:
        response = self.http.request(method, path, **kwargs)
        logger.debug("%s %s -> %s", method, path, response.status_code)
        _raise_for_error(response)
        return response.json()

    def fetch_file(self, path: str) -> bytes:
        """Сырые байты файла по пути, который вернул /api/upload."""
        # только путь на сервере API: абсолютный URL httpx отправил бы мимо base_url
        if not path.startswith("/") or path.startswith("//") or not httpx.URL(path).is_relative_url:
            raise ApiError(f"Недопустимый путь к файлу: {path}")
        response = self.http.get(path)
        _raise_for_error(response)
        return response.content

    def upload_pdf(self, file: Optional[UploadedFile]) -> str:
        # Без файла заметка тоже валидна: запроса нет, путь пустой
        if file is None or not file.filename:
            return ""
        data = self.request_json(
            "POST",
            "/api/upload",
            files={"file": (file.filename, file.content, file.content_type)},
        )
        return data.get("path") or ""

    def list_notes(self) -> list:
        return self.request_json("GET", "/api/notes")["notes"]

    def list_reviews(self) -> list:
        return self.request_json("GET", "/api/reviews")["notes"]

    def create_note(self, payload: dict) -> dict:
        return self.request_json("POST", "/api/notes", json=payload)

    def update_note(self, note_id, fields: dict) -> dict:
        return self.request_json("PUT", _note_path(note_id), json=fields)

    def complete_review(self, note_id) -> dict:
        return self.request_json("POST", _note_path(note_id) + "/review")

    def delete_note(self, note_id) -> dict:
        return self.request_json("DELETE", _note_path(note_id))
