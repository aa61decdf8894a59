"""Tests for the password reset command line script."""

from expense_tracker_api.app.core.security import hash_password, verify_password
from expense_tracker_api.app.schemas.user import Role
from expense_tracker_api.app.stores.user_store import UserStore
from reset_password import main


def test_resets_existing_user(db):
    store = UserStore(db)
    store.create("Bob Smith", "bob@x.com", hash_password("Passw0rd!"), Role.USER)

    assert main(["--db", db.path, "--email", "bob@x.com", "--password", "N3wPass!"]) == 0

    stored = store.get_by_email("bob@x.com")
    assert verify_password("N3wPass!", stored.password_hash)
    assert not verify_password("Passw0rd!", stored.password_hash)


def test_unknown_user(db):
    assert main(["--db", db.path, "--email", "ghost@x.com", "--password", "N3wPass!"]) == 2


def test_weak_password_is_refused(db, capsys):
    assert main(["--db", db.path, "--email", "bob@x.com", "--password", "weak"]) == 1
    assert "Password must be" in capsys.readouterr().err


def test_missing_database(tmp_path):
    missing = str(tmp_path / "nope.db")
    assert main(["--db", missing, "--email", "bob@x.com", "--password", "N3wPass!"]) == 1


def test_relative_db_path_uses_working_directory(db, tmp_path, monkeypatch):
    UserStore(db).create("Bob Smith", "bob@x.com", hash_password("Passw0rd!"), Role.USER)
    monkeypatch.chdir(tmp_path)

    assert main(["--db", "unit.db", "--email", "bob@x.com", "--password", "N3wPass!"]) == 0
    assert verify_password("N3wPass!", UserStore(db).get_by_email("bob@x.com").password_hash)
