import pytest

from app import fortunes
from app.fortunes import BLANK_TEXT, NotFoundError, ValidationError


def test_create_returns_stored_record(db_path):
    fortune = fortunes.create("Good things come.")
    assert fortune.id > 0
    assert fortune.text == "Good things come."
    assert fortunes.count() == 1


def test_create_keeps_text_exactly(db_path):
    fortune = fortunes.create("  padded  ")
    assert fortune.text == "  padded  "
    assert fortunes.random_fortune().text == "  padded  "


def test_created_ids_are_unique(db_path):
    ids = {fortunes.create(f"fortune {i}").id for i in range(5)}
    assert len(ids) == 5


@pytest.mark.parametrize("text", ["", "   ", "\t\n", None, 42])
def test_blank_text_is_rejected_and_not_persisted(db_path, text):
    fortunes.create("existing")
    with pytest.raises(ValidationError) as exc_info:
        fortunes.create(text)
    assert exc_info.value.messages == [BLANK_TEXT]
    assert fortunes.count() == 1


def test_random_fortune_on_empty_store(db_path):
    with pytest.raises(NotFoundError) as exc_info:
        fortunes.random_fortune()
    assert exc_info.value.message == "No fortunes yet"


def test_single_row_is_always_returned(db_path):
    only = fortunes.create("The only one")
    for _ in range(10):
        assert fortunes.random_fortune() == only


def test_random_fortune_reaches_every_row(db_path):
    fortunes.create("heads")
    fortunes.create("tails")
    seen = {fortunes.random_fortune().text for _ in range(200)}
    assert seen == {"heads", "tails"}
