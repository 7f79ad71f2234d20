# tests/test_validation.py
import pytest

from notes_app.notes.schemas import collect_violations


def test_valid_note():
    assert collect_violations({"title": "Hello", "content": "World"}) == []


@pytest.mark.parametrize("title, expected", [
    ("", ["Title must not be blank.", "Title must be between 3 and 255 characters."]),
    ("   ", ["Title must not be blank."]),
    ("ab", ["Title must be between 3 and 255 characters."]),
    ("a" * 256, ["Title must be between 3 and 255 characters."]),
    (None, ["Title must not be blank."]),
    (123, ["Title must be a string."]),
])
def test_title_violations(title, expected):
    assert collect_violations({"title": title, "content": "ok"}) == expected


def test_missing_fields_title_first():
    assert collect_violations({}) == ["Title must not be blank.", "Content must not be blank."]


def test_blank_content():
    assert collect_violations({"title": "Fine", "content": "\n\t "}) == ["Content must not be blank."]


def test_unknown_keys_ignored():
    payload = {"title": "Fine", "content": "ok", "id": 3, "createdAt": "2024-01-01 00:00:00"}
    assert collect_violations(payload) == []
