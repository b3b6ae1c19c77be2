"""Лестница интервалов повторения: 1, 3, 7, 14, 30 дней."""
from datetime import datetime, timedelta, timezone
from typing import Optional

REVIEW_INTERVALS_DAYS = (1, 3, 7, 14, 30)

ISO_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime(ISO_FORMAT)


def next_stage(stage: int) -> int:
    """Следующая ступень, не выше числа интервалов."""
    if stage < len(REVIEW_INTERVALS_DAYS):
        return stage + 1
    return stage


def next_review_at(stage: int, now: Optional[datetime] = None) -> str:
    """
    Дата следующего повторения для ступени stage.
    Ступени за концом лестницы получают последний интервал.
    """
    now = now or utcnow()
    index = min(stage, len(REVIEW_INTERVALS_DAYS) - 1)
    return to_iso(now + timedelta(days=REVIEW_INTERVALS_DAYS[index]))
