from __future__ import annotations

from pathlib import Path

import pytest

from petconnect.auth.models import UserRole
from petconnect.auth.repository import EmailAlreadyExistsError, UserRepository
from tests.factories import open_database


def test_user_repository_create_and_lookup_case_insensitive(tmp_path: Path) -> None:
    database = open_database(tmp_path)
    repo = UserRepository(database)

    created = repo.create(
        name="Alice",
        email="Alice@Example.COM",
        password_hash="hash",
        role=UserRole.ADOPTER,
    )
    by_email = repo.get_by_email("alice@example.com")
    by_id = repo.get_by_id(created.id)
    database.close()

    assert created.email == "alice@example.com"
    assert by_email is not None
    assert by_email.id == created.id
    assert by_id is not None
    assert by_id.role is UserRole.ADOPTER


def test_user_repository_rejects_duplicate_email(tmp_path: Path) -> None:
    database = open_database(tmp_path)
    repo = UserRepository(database)
    repo.create(name="A", email="dupe@example.com", password_hash="h1", role=UserRole.ADOPTER)

    with pytest.raises(EmailAlreadyExistsError):
        repo.create(name="B", email="DUPE@example.com", password_hash="h2", role=UserRole.SHELTER)

    assert repo.count() == 1
    database.close()


def test_user_repository_missing_user_returns_none(tmp_path: Path) -> None:
    database = open_database(tmp_path)
    repo = UserRepository(database)

    assert repo.get_by_email("nobody@example.com") is None
    assert repo.get_by_id(42) is None
    database.close()
