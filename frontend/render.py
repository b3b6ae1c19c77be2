import os
from typing import Optional

import jinja2
from markupsafe import Markup

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")

env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(TEMPLATES_DIR),
    autoescape=True,
)


def split_tags(tags: Optional[str]) -> list:
    """'a, b,,  c ' -> ['a', 'b', 'c']"""
    if not tags:
        return []
    return [tag.strip() for tag in tags.split(",") if tag.strip()]


env.globals["split_tags"] = split_tags


def render_template(name: str, **context) -> bytes:
    template = env.get_template(name)
    return template.render(**context).encode("utf-8")


def note_template(note: dict) -> Markup:
    """HTML-фрагмент одной заметки: теги, даты и кнопки действий."""
    return Markup(env.get_template("notes/item.html").render(note=note))


def render_note_list(notes: list) -> Markup:
    return Markup("").join(note_template(note) for note in notes)
