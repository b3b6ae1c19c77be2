"""Просмотр первой страницы PDF.

Документ грузится по пути (через fetch), берется страница 0, область
просмотра считается с масштабом 1.2, страница рисуется в PNG-поверхность
такого же размера. Новый просмотр заменяет предыдущий документ.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

import fitz  # PyMuPDF

logger = logging.getLogger(__name__)

DEFAULT_SCALE = 1.2


class PreviewError(Exception):
    pass


class PreviewState(str, Enum):
    IDLE = "idle"
    DISPLAYING = "displaying"


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float
    scale: float


@dataclass
class PdfSurface:
    width: int
    height: int
    png: bytes = b""


def compute_viewport(page, scale: float) -> Viewport:
    rect = page.rect * fitz.Matrix(scale, scale)
    return Viewport(width=rect.width, height=rect.height, scale=scale)


class PdfPreview:
    def __init__(self, fetch: Callable[[str], bytes], scale: float = DEFAULT_SCALE):
        self.fetch = fetch
        self.scale = scale
        self.state = PreviewState.IDLE
        self.placeholder_visible = True
        self.document = None
        self.path: Optional[str] = None
        self.surface: Optional[PdfSurface] = None
        # растет с каждым успешным рендером, чтобы браузер не брал старую картинку из кэша
        self.version = 0

    def render(self, path: str) -> PdfSurface:
        # заглушка прячется сразу и не возвращается при ошибке
        self.placeholder_visible = False

        data = self.fetch(path)
        try:
            document = fitz.open(stream=data, filetype="pdf")
        except RuntimeError as e:
            raise PreviewError(f"Не удалось открыть PDF {path}: {e}") from e
        self._replace_document(document, path)

        try:
            page = document.load_page(0)
            viewport = compute_viewport(page, self.scale)
            pix = page.get_pixmap(matrix=fitz.Matrix(viewport.scale, viewport.scale), alpha=False)
        except (RuntimeError, ValueError, IndexError) as e:
            raise PreviewError(f"Не удалось отрисовать PDF {path}: {e}") from e

        self.surface = PdfSurface(width=pix.width, height=pix.height, png=pix.tobytes("png"))
        self.state = PreviewState.DISPLAYING
        self.version += 1
        logger.info("PDF %s: страница 1, %sx%s", path, pix.width, pix.height)
        return self.surface

    def _replace_document(self, document, path: str) -> None:
        previous = self.document
        self.document = document
        self.path = path
        if previous is not None:
            previous.close()
