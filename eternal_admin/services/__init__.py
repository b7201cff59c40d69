"""Application services"""
from eternal_admin.services.result import Err, Ok, Result, unwrap
from eternal_admin.services.session_manager import LoginResult, SessionManager

__all__ = ["Err", "LoginResult", "Ok", "Result", "SessionManager", "unwrap"]
