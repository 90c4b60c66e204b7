"""
Middleware - authentication and authorization decorators.
"""

from .auth import jwt_required, admin_required
from .jwt_utils import (
    create_access_token,
    decode_token,
    extract_token_from_header,
    TokenType
)

__all__ = [
    'jwt_required',
    'admin_required',
    'create_access_token',
    'decode_token',
    'extract_token_from_header',
    'TokenType',
]
