"""Services package - Business logic above the repositories."""
from .admin_auth_service import AdminAuthService, IssuedToken, get_admin_auth_service

__all__ = [
    "AdminAuthService",
    "IssuedToken",
    "get_admin_auth_service",
]
