from dataclasses import dataclass
from enum import Enum
from typing import Optional


class NoteAction(str, Enum):
    PREVIEW = "preview"
    REVIEW = "review"
    DELETE = "delete"


@dataclass(frozen=True)
class Action:
    kind: NoteAction
    # путь к PDF для PREVIEW, id заметки для REVIEW и DELETE
    target: str


def parse_action(fields: dict) -> Optional[Action]:
    """
    Действие из данных формы кнопки (action, target).
    Неизвестное действие или пустая цель -> None, клик ничего не делает.
    """
    kind = _first(fields.get("action"))
    target = _first(fields.get("target"))
    if not kind or not target:
        return None
    try:
        return Action(NoteAction(kind), target)
    except ValueError:
        return None


def _first(value):
    # parse_qs отдает списки
    if isinstance(value, list):
        return value[0] if value else None
    return value
