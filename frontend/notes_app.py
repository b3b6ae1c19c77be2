import logging
from typing import Optional

from markupsafe import Markup

from frontend.actions import Action, NoteAction
from frontend.api_client import NotesApiClient
from frontend.forms import NoteForm
from frontend.pdf_preview import PdfPreview
from frontend.render import render_note_list

logger = logging.getLogger(__name__)


class NotesApp:
    """
    Состояние клиента: две отрисованные области списков и текущий PDF.
    Источник правды -- сервер; после каждого изменения оба списка
    перечитываются целиком через refresh().
    """

    def __init__(self, client: NotesApiClient, preview: Optional[PdfPreview] = None):
        self.client = client
        self.preview = preview or PdfPreview(client.fetch_file)
        self.note_list_html = Markup("")
        self.review_list_html = Markup("")
        self.loaded = False

    def load_notes(self):
        notes = self.client.list_notes()
        self.note_list_html = render_note_list(notes)

    def load_reviews(self):
        notes = self.client.list_reviews()
        self.review_list_html = render_note_list(notes)

    def refresh(self):
        self.load_notes()
        self.load_reviews()
        self.loaded = True

    def ensure_loaded(self):
        if not self.loaded:
            self.refresh()

    def submit_note(self, form: NoteForm) -> dict:
        """Загрузка PDF (если есть) -> создание заметки -> сброс формы -> обновление списков."""
        pdf_path = self.client.upload_pdf(form.pdf)

        payload = {
            "title": form.title,
            "tags": form.tags or "",
            "content": form.content or "",
            "pdfPath": pdf_path,
        }
        created = self.client.create_note(payload)
        logger.info("Заметка создана: %s", created.get("id"))

        form.reset()
        self.refresh()
        return created

    def handle_action(self, action: Optional[Action]):
        if action is None:
            return

        if action.kind is NoteAction.PREVIEW:
            self.preview.render(action.target)
        elif action.kind is NoteAction.REVIEW:
            self.client.complete_review(action.target)
            self.refresh()
        elif action.kind is NoteAction.DELETE:
            self.client.delete_note(action.target)
            self.refresh()
