"""Authentication module.

This module provides:
- Pluggable identity verification (Firebase ID tokens, local JWT, headers)
- FastAPI security dependencies
"""

from recipe_api.auth.dependencies import (
    EMPTY_EMAIL,
    CurrentUser,
    CurrentUserDep,
    get_current_user,
)


__all__ = [
    "EMPTY_EMAIL",
    "CurrentUser",
    "CurrentUserDep",
    "get_current_user",
]
