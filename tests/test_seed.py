"""Tests for the default account seeding"""
from eternal_admin.seed import seed_default_admin
from eternal_admin.services import SessionManager


def test_seed_creates_super_admin_once(manager: SessionManager):
    assert seed_default_admin(manager) is True
    assert seed_default_admin(manager) is False

    session = manager.login("admin@example.com", "admin123").value
    assert session.admin.role == "SUPER_ADMIN"
