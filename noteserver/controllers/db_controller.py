import logging
import os
import sqlite3

from noteserver.review import next_review_at, next_stage, to_iso, utcnow

logger = logging.getLogger(__name__)

NOTE_COLUMNS = "id, title, content, tags, created_at, next_review_at, review_stage, pdf_path"


def row_to_note(row):
    """Кортеж из таблицы notes -> dict в формате API."""
    return {
        "id": row[0],
        "title": row[1],
        "content": row[2],
        "tags": row[3],
        "createdAt": row[4],
        "nextReviewAt": row[5],
        "reviewStage": row[6],
        "pdfPath": row[7],
    }


class DatabaseController:
    def __init__(self, db_path="./data/app.db"):
        self.db_path = db_path
        parent = os.path.dirname(os.path.abspath(db_path))
        os.makedirs(parent, exist_ok=True)
        self.create_tables()

    def connect(self):
        """Создает и возвращает соединение с базой данных SQLite."""
        return sqlite3.connect(self.db_path)

    def create_tables(self):
        conn = self.connect()
        cur = conn.cursor()

        cur.execute("""
                    CREATE TABLE IF NOT EXISTS notes (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        title TEXT NOT NULL,
                        content TEXT NOT NULL,
                        tags TEXT NOT NULL,
                        created_at TEXT NOT NULL,
                        next_review_at TEXT NOT NULL,
                        review_stage INTEGER NOT NULL,
                        pdf_path TEXT NOT NULL
                    );
                    """)
        conn.commit()
        conn.close()
        logger.info("✔ Таблица notes готова (%s)", self.db_path)

    def list_notes(self):
        """Все заметки, новые первыми."""
        conn = self.connect()
        cur = conn.cursor()
        cur.execute(f"SELECT {NOTE_COLUMNS} FROM notes ORDER BY created_at DESC, id DESC")
        rows = cur.fetchall()
        conn.close()
        return [row_to_note(r) for r in rows]

    def list_reviews_due(self, now_iso: str):
        """
        Заметки, у которых next_review_at <= now_iso.
        ISO-строки одного формата сравниваются лексикографически.
        """
        conn = self.connect()
        cur = conn.cursor()
        cur.execute(
            f"SELECT {NOTE_COLUMNS} FROM notes WHERE next_review_at <= ? ORDER BY next_review_at ASC",
            (now_iso,),
        )
        rows = cur.fetchall()
        conn.close()
        return [row_to_note(r) for r in rows]

    def read_note_by_id(self, id):
        conn = self.connect()
        cur = conn.cursor()
        cur.execute(f"SELECT {NOTE_COLUMNS} FROM notes WHERE id=?", (id,))
        row = cur.fetchone()
        conn.close()
        if not row:
            return None
        return row_to_note(row)

    def insert_note(self, note, now=None):
        """
        Добавляет заметку и возвращает ее в формате API

        на вход:
        объект типа NoteIn
        """
        now = now or utcnow()
        conn = self.connect()
        cur = conn.cursor()

        cur.execute(
            "INSERT INTO notes (title, content, tags, created_at, next_review_at, review_stage, pdf_path) "
            "VALUES (?, ?, ?, ?, ?, ?, ?)",
            (
                note.title,
                note.content,
                note.tags,
                to_iso(now),
                next_review_at(0, now),
                0,
                note.pdfPath,
            ),
        )
        conn.commit()
        new_id = cur.lastrowid
        conn.close()
        logger.info("✔ Заметка %s добавлена", new_id)
        return self.read_note_by_id(new_id)

    def update_note(self, id, title, content, tags, pdf_path):
        conn = self.connect()
        cur = conn.cursor()
        cur.execute(
            "UPDATE notes SET title=?, content=?, tags=?, pdf_path=? WHERE id=?",
            (title, content, tags, pdf_path, id),
        )
        conn.commit()
        conn.close()
        return self.read_note_by_id(id)

    def advance_review(self, id, now=None):
        """Отмечает повторение: следующая ступень и новая дата. None если заметки нет."""
        note = self.read_note_by_id(id)
        if note is None:
            return None

        stage = next_stage(note["reviewStage"])
        due = next_review_at(stage, now)

        conn = self.connect()
        cur = conn.cursor()
        cur.execute(
            "UPDATE notes SET review_stage=?, next_review_at=? WHERE id=?",
            (stage, due, id),
        )
        conn.commit()
        conn.close()
        logger.info("✔ Заметка %s: ступень %s, следующее повторение %s", id, stage, due)
        return self.read_note_by_id(id)

    def delete_note(self, id):
        """Удаляет note по его id и возвращает 1"""
        conn = self.connect()
        cur = conn.cursor()
        cur.execute("DELETE FROM notes WHERE id=?", (id,))
        conn.commit()
        conn.close()
        return 1
