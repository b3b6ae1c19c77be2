import logging
from urllib.parse import unquote
from wsgiref.simple_server import make_server

import httpx
from python_multipart.exceptions import FormParserError

from frontend.actions import NoteAction, parse_action
from frontend.api_client import ApiError, NotesApiClient
from frontend.config import settings
from frontend.forms import NoteForm, get_post_data, parse_note_form
from frontend.notes_app import NotesApp
from frontend.pdf_preview import PdfPreview, PreviewError
from frontend.render import render_template

logger = logging.getLogger(__name__)

# Ошибки, которые показываются пользователю на странице, а не роняют запрос
USER_ERRORS = (ApiError, PreviewError, httpx.HTTPError)


def not_found(start_response):
    start_response("404 Not Found", [("Content-Type", "text/plain; charset=utf-8")])
    return [b"Not Found"]

def redirect(start_response, location):
    start_response("302 Found", [("Location", location)])
    return [b""]

def render_index(start_response, notes_app, form=None, error=None, status="200 OK"):
    body = render_template(
        "index.html",
        title="Заметки",
        form=form or NoteForm(),
        note_list=notes_app.note_list_html,
        review_list=notes_app.review_list_html,
        preview=notes_app.preview,
        error=error,
    )
    start_response(status, [("Content-Type", "text/html; charset=utf-8")])
    return [body]


def create_application(notes_app: NotesApp):
    def application(environ, start_response):
        path = unquote(environ.get("PATH_INFO", "/")) or "/"
        method = environ.get("REQUEST_METHOD", "GET").upper()

        # === Главная страница ===
        if method == "GET" and path in ("/", "/index"):
            try:
                notes_app.ensure_loaded()
            except USER_ERRORS as e:
                logger.exception("Не удалось загрузить списки")
                return render_index(start_response, notes_app, error=str(e))
            return render_index(start_response, notes_app)

        # === Создание заметки ===
        if method == "POST" and path == "/notes":
            try:
                form = parse_note_form(environ)
            except (FormParserError, UnicodeDecodeError) as e:
                logger.warning("Некорректная форма: %s", e)
                return render_index(start_response, notes_app, error="Некорректные данные формы", status="400 Bad Request")
            try:
                notes_app.submit_note(form)
            except USER_ERRORS as e:
                logger.exception("Не удалось создать заметку")
                # форма остается заполненной для повторной отправки
                return render_index(start_response, notes_app, form=form, error=str(e))
            return redirect(start_response, "/")

        # === Кнопки в списках ===
        if method == "POST" and path == "/actions":
            action = parse_action(get_post_data(environ))
            try:
                notes_app.handle_action(action)
            except USER_ERRORS as e:
                logger.exception("Действие %s не выполнено", action)
                return render_index(start_response, notes_app, error=str(e))
            return redirect(start_response, "/#preview" if action and action.kind is NoteAction.PREVIEW else "/")

        # === Обновление списков ===
        if method == "GET" and path in ("/refresh/notes", "/refresh/reviews"):
            try:
                if path == "/refresh/notes":
                    notes_app.load_notes()
                else:
                    notes_app.load_reviews()
            except USER_ERRORS as e:
                logger.exception("Не удалось обновить %s", path)
                return render_index(start_response, notes_app, error=str(e))
            return redirect(start_response, "/")

        # === Текущая страница PDF ===
        if method == "GET" and path == "/preview.png":
            surface = notes_app.preview.surface
            if surface is None:
                return not_found(start_response)
            start_response("200 OK", [
                ("Content-Type", "image/png"),
                ("Content-Length", str(len(surface.png))),
                ("Cache-Control", "no-store"),
            ])
            return [surface.png]

        return not_found(start_response)

    return application


def main():
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    http = httpx.Client(base_url=settings.API_URL)
    client = NotesApiClient(http)
    notes_app = NotesApp(client, PdfPreview(client.fetch_file, scale=settings.PREVIEW_SCALE))

    try:
        with make_server(settings.HOST, settings.PORT, create_application(notes_app)) as server:
            logger.info("Frontend serving on http://%s:%s", settings.HOST, settings.PORT)
            logger.info("API server should be running on %s", settings.API_URL)
            server.serve_forever()
    finally:
        http.close()


if __name__ == "__main__":
    main()
