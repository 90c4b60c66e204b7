"""
JWT utilities - creating and validating bearer tokens.

Tokens carry the identity the core consumes: user id, name and
home state/city. Every token has a 'jti' claim.
"""

import jwt
import uuid
from datetime import datetime
from typing import Optional, Tuple
from flask import current_app


class TokenType:
    """Token types in use."""
    ACCESS = 'access'


def _generate_jti() -> str:
    """Unique JWT ID."""
    return str(uuid.uuid4())


def create_access_token(user_id: int, name: str, state: str, city: str) -> str:
    """
    Creates an access token for a user.

    Args:
        user_id: User.id
        name: display name
        state, city: home location at login time

    Returns:
        Encoded JWT string
    """
    expires_delta = current_app.config['JWT_ACCESS_TOKEN_EXPIRES']
    now = datetime.utcnow()

    payload = {
        'sub': str(user_id),       # PyJWT requires a string subject
        'jti': _generate_jti(),
        'name': name,
        'state': state,
        'city': city,
        'type': TokenType.ACCESS,
        'exp': now + expires_delta,
        'iat': now,
    }

    return jwt.encode(
        payload,
        current_app.config['JWT_SECRET_KEY'],
        algorithm='HS256'
    )


def decode_token(token: str) -> Tuple[Optional[dict], Optional[str]]:
    """
    Decodes and validates a JWT.

    Returns:
        (payload, None) on success, (None, error message) otherwise
    """
    try:
        payload = jwt.decode(
            token,
            current_app.config['JWT_SECRET_KEY'],
            algorithms=['HS256']
        )
        return payload, None

    except jwt.ExpiredSignatureError:
        return None, 'Token has expired'

    except jwt.InvalidTokenError as e:
        return None, f'Invalid token: {str(e)}'


def extract_token_from_header(auth_header: str) -> Optional[str]:
    """
    Pulls the token out of an Authorization header.

    Expects "Bearer <token>".
    """
    if not auth_header:
        return None

    parts = auth_header.split()

    if len(parts) != 2:
        return None

    if parts[0].lower() != 'bearer':
        return None

    return parts[1]
