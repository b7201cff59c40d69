"""Storage layer: ORM access mapped to plain records"""
from eternal_admin.repositories.admin_repository import AdminRepository
from eternal_admin.repositories.refresh_token_repository import RefreshTokenRepository

__all__ = ["AdminRepository", "RefreshTokenRepository"]
