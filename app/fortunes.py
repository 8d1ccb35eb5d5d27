from typing import List, Optional

from .db import get_conn
from .logger import get_logger
from .models import Fortune

logger = get_logger(__name__)

BLANK_TEXT = "Text can't be blank"
EMPTY_TABLE = "No fortunes yet"


class ValidationError(Exception):
    """Raised when a fortune cannot be saved; carries human-readable messages."""

    def __init__(self, messages: List[str]):
        self.messages = messages
        super().__init__("; ".join(messages))


class NotFoundError(Exception):
    def __init__(self, message: str = EMPTY_TABLE):
        self.message = message
        super().__init__(message)


def validate(text: Optional[str]) -> List[str]:
    errors = []
    if not isinstance(text, str) or not text.strip():
        errors.append(BLANK_TEXT)
    return errors


def create(text: Optional[str]) -> Fortune:
    errors = validate(text)
    if errors:
        logger.warning("fortune_rejected", errors=errors)
        raise ValidationError(errors)
    with get_conn() as conn:
        cur = conn.execute("INSERT INTO fortunes (text) VALUES (?)", (text,))
        fortune = Fortune(id=cur.lastrowid, text=text)
    logger.info("fortune_created", fortune_id=fortune.id)
    return fortune


def random_fortune() -> Fortune:
    # Uniform pick via SQLite's RNG, fine for thousands of rows
    with get_conn() as conn:
        row = conn.execute(
            "SELECT id, text FROM fortunes ORDER BY RANDOM() LIMIT 1"
        ).fetchone()
    if not row:
        logger.info("fortune_table_empty")
        raise NotFoundError()
    return Fortune(id=row["id"], text=row["text"])


def count() -> int:
    with get_conn() as conn:
        return conn.execute("SELECT COUNT(*) AS c FROM fortunes").fetchone()["c"]
