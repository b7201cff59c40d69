"""Database models"""
from eternal_admin.models.admin import Admin, AdminRole
from eternal_admin.models.admin_refresh_token import AdminRefreshToken

__all__ = ["Admin", "AdminRole", "AdminRefreshToken"]
