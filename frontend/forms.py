from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs

from python_multipart import parse_form
from python_multipart.exceptions import FormParserError

from frontend.api_client import UploadedFile

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


@dataclass
class NoteForm:
    title: str = ""
    tags: str = ""
    content: str = ""
    pdf: Optional[UploadedFile] = None

    def reset(self):
        self.title = ""
        self.tags = ""
        self.content = ""
        self.pdf = None


def get_post_data(environ):
    """Читает POST данные (application/x-www-form-urlencoded) из WSGI environ"""
    try:
        content_length = int(environ.get("CONTENT_LENGTH", 0) or 0)
    except ValueError:
        content_length = 0

    if content_length > 0:
        body = environ["wsgi.input"].read(content_length).decode("utf-8")
        return parse_qs(body)
    return {}


def get_multipart_data(environ):
    """Читает multipart/form-data: возвращает (поля, файлы)"""
    fields = {}
    files = {}

    def on_field(field):
        fields[field.field_name.decode("utf-8")] = (field.value or b"").decode("utf-8")

    def on_file(file):
        stream = file.file_object
        try:
            stream.seek(0)
            files[file.field_name.decode("utf-8")] = UploadedFile(
                filename=(file.file_name or b"").decode("utf-8"),
                content=stream.read(),
            )
        finally:
            stream.close()

    content_type = environ.get("CONTENT_TYPE", "")
    if not content_type.startswith(FORM_CONTENT_TYPES):
        raise FormParserError(f"Unsupported Content-Type: {content_type!r}")
    headers = {"Content-Type": content_type}
    if environ.get("CONTENT_LENGTH"):
        headers["Content-Length"] = environ["CONTENT_LENGTH"]
    parse_form(headers, environ["wsgi.input"], on_field, on_file)
    return fields, files


def parse_note_form(environ) -> NoteForm:
    fields, files = get_multipart_data(environ)
    pdf = files.get("pdf")
    if pdf is not None and not pdf.filename:
        # браузер шлет пустую часть, если файл не выбран
        pdf = None
    return NoteForm(
        title=fields.get("title", ""),
        tags=fields.get("tags", ""),
        content=fields.get("content", ""),
        pdf=pdf,
    )
