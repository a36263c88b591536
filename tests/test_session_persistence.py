"""Mini README: Tests for the on-disk sign-in record."""

from __future__ import annotations

import json

from mosquefund.accounts import Profile, Role, SessionStore


def test_save_writes_profile_without_pin(tmp_path) -> None:
    """The persisted record is keyed by name and omits the PIN."""

    path = tmp_path / "session.json"
    SessionStore(path).save(Profile("c1", "Bilal", Role.CASHIER, pin="1111"))

    document = json.loads(path.read_text(encoding="utf-8"))
    assert document == {"userProfile": {"id": "c1", "name": "Bilal", "role": "cashier"}}


def test_load_returns_none_when_absent_or_corrupt(tmp_path) -> None:
    path = tmp_path / "session.json"
    store = SessionStore(path)
    assert store.load() is None

    path.write_text("{not json", encoding="utf-8")
    assert store.load() is None

    path.write_text(json.dumps({"userProfile": {"id": "x", "role": "imam"}}), encoding="utf-8")
    assert store.load() is None


def test_clear_removes_only_own_key(tmp_path) -> None:
    path = tmp_path / "session.json"
    path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
    store = SessionStore(path, key="staff")
    store.save(Profile("a1", "Amina", Role.ADMIN))

    store.clear()
    store.clear()

    assert json.loads(path.read_text(encoding="utf-8")) == {"theme": "dark"}
    assert store.load() is None
