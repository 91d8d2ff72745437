import pytest

from auth_service.db.repositories import users as user_repo


def test_create_normalizes_email(db_session):
    user = user_repo.create_user(db_session, "alice", "  Alice@Example.COM ", "hash")
    assert user.email == "alice@example.com"
    assert user_repo.get_user_by_email(db_session, "ALICE@example.com").id == user.id


def test_find_conflicting_user_excludes_self(db_session):
    alice = user_repo.create_user(db_session, "alice", "alice@example.com", "hash")
    assert user_repo.find_conflicting_user(db_session, "x@example.com", "alice").id == alice.id
    assert user_repo.find_conflicting_user(db_session, "alice@example.com", "alice", exclude_id=alice.id) is None


def test_delete_and_count(db_session):
    alice = user_repo.create_user(db_session, "alice", "alice@example.com", "hash")
    assert user_repo.count_users(db_session) == 1
    assert user_repo.delete_user(db_session, alice.id) is True
    assert user_repo.delete_user(db_session, alice.id) is False
    assert user_repo.count_users(db_session) == 0


def test_unique_constraints_enforced(db_session):
    from sqlalchemy.exc import IntegrityError

    user_repo.create_user(db_session, "alice", "alice@example.com", "hash")
    with pytest.raises(IntegrityError):
        user_repo.create_user(db_session, "alice", "other@example.com", "hash")
    db_session.rollback()
