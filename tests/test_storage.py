import re

import pytest

from platesnap.errors import InternalIOError
from platesnap.services import storage
from platesnap.services.storage import ImageStore, generate_safe_filename, random_token


def test_sanitizes_base_name():
    name = generate_safe_filename("My Lunch Photo!! .PNG", now_ms=1700000000000, token="abc1234")
    assert name == "my-lunch-photo-1700000000000-abc1234.png"


@pytest.mark.parametrize("original, expected", [
    ("salad.jpg", "salad-1-tok0000.jpg"),
    ("__Breakfast__Bowl.JPEG", "breakfast-bowl-1-tok0000.jpeg"),
    ("a.b.c.webp", "a-b-c-1-tok0000.webp"),
    ("!!!.gif", "-1-tok0000.gif"),
    ("photo", "photo-1-tok0000.photo"),
    ("evil.png/../../x", "evil-png-x-1-tok0000.x"),
])
def test_filename_edge_cases(original, expected):
    assert generate_safe_filename(original, now_ms=1, token="tok0000") == expected


def test_extension_cannot_carry_path_separators():
    name = generate_safe_filename("x.p/../../ng", now_ms=1, token="tok0000")
    assert "/" not in name
    assert name.endswith(".ng")


def test_random_token_is_base36():
    for _ in range(50):
        assert re.fullmatch(r"[0-9a-z]{7}", random_token())


def test_same_millisecond_uploads_get_distinct_names(monkeypatch):
    monkeypatch.setattr(storage.time, "time", lambda: 1700000000.5)
    first = generate_safe_filename("lunch.png")
    second = generate_safe_filename("lunch.png")

    assert first.startswith("lunch-1700000000500-")
    assert second.startswith("lunch-1700000000500-")
    assert first != second


def test_store_writes_bytes_verbatim(tmp_path):
    store = ImageStore(tmp_path / "nested" / "uploads")
    stored = store.save("Dinner.PNG", b"\x89PNG raw bytes")

    assert stored.path.read_bytes() == b"\x89PNG raw bytes"
    assert stored.url == f"/uploads/{stored.filename}"
    assert stored.path.parent == (tmp_path / "nested" / "uploads").resolve()


def test_store_wraps_filesystem_errors(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("occupied")
    store = ImageStore(blocker)

    with pytest.raises(InternalIOError) as exc_info:
        store.save("a.png", b"data")
    assert exc_info.value.message == "Failed to upload file"
