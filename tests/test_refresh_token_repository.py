"""Tests for the refresh token ledger"""
import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eternal_admin.models import Admin
from eternal_admin.records import AdminRecord
from eternal_admin.repositories import RefreshTokenRepository


def test_record_and_find(db: Session, editor: AdminRecord):
    ledger = RefreshTokenRepository(db)
    row = ledger.record(editor.id, "token-1")

    found = ledger.find_by_token("token-1")
    assert found == row
    assert found.admin_id == editor.id


def test_find_unknown_token(db: Session):
    assert RefreshTokenRepository(db).find_by_token("nope") is None


def test_delete_is_idempotent(db: Session, editor: AdminRecord):
    ledger = RefreshTokenRepository(db)
    ledger.record(editor.id, "token-1")

    assert ledger.delete_by_token("token-1") == 1
    assert ledger.delete_by_token("token-1") == 0
    assert ledger.delete_by_token("never-issued") == 0
    assert ledger.find_by_token("token-1") is None


def test_delete_only_touches_given_token(db: Session, editor: AdminRecord):
    ledger = RefreshTokenRepository(db)
    ledger.record(editor.id, "token-1")
    ledger.record(editor.id, "token-2")

    ledger.delete_by_token("token-1")
    assert ledger.find_by_token("token-2") is not None


def test_token_column_is_unique(db: Session, editor: AdminRecord):
    ledger = RefreshTokenRepository(db)
    ledger.record(editor.id, "token-1")
    with pytest.raises(IntegrityError):
        ledger.record(editor.id, "token-1")
    db.rollback()


def test_rows_cascade_with_admin(db: Session, editor: AdminRecord):
    ledger = RefreshTokenRepository(db)
    ledger.record(editor.id, "token-1")

    db.query(Admin).filter(Admin.id == editor.id).delete(synchronize_session=False)
    db.commit()

    assert ledger.find_by_token("token-1") is None
