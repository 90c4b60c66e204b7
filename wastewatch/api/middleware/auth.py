"""
Auth middleware - decorators for authentication and authorization.
"""

from functools import wraps
from flask import request, g, jsonify
from ...extensions import db
from .jwt_utils import decode_token, extract_token_from_header, TokenType


def jwt_required(f):
    """
    Requires a valid access token.

    Decodes the bearer token, loads the user and sets g.current_user,
    g.current_user_id and g.token_payload.

    Usage:
        @bp.route('/protected')
        @jwt_required
        def protected_route():
            user = g.current_user
            ...
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        auth_header = request.headers.get('Authorization')
        token = extract_token_from_header(auth_header)

        if not token:
            return jsonify({
                'error': 'unauthorized',
                'message': 'Access token required'
            }), 401

        payload, error = decode_token(token)

        if error:
            return jsonify({
                'error': 'unauthorized',
                'message': error
            }), 401

        if payload.get('type') != TokenType.ACCESS:
            return jsonify({
                'error': 'unauthorized',
                'message': 'Access token expected'
            }), 401

        try:
            user_id = int(payload.get('sub'))
        except (TypeError, ValueError):
            return jsonify({
                'error': 'unauthorized',
                'message': 'Invalid token subject'
            }), 401

        from ...models import User
        user = db.session.get(User, user_id)
        if not user:
            return jsonify({
                'error': 'unauthorized',
                'message': 'User no longer exists'
            }), 401

        g.current_user_id = user_id
        g.current_user = user
        g.token_payload = payload

        return f(*args, **kwargs)

    return decorated


def admin_required(f):
    """
    Requires an admin user. MUST be used AFTER @jwt_required.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        if not hasattr(g, 'current_user'):
            return jsonify({
                'error': 'internal_error',
                'message': 'admin_required must come after jwt_required'
            }), 500

        if not g.current_user.is_admin:
            return jsonify({
                'error': 'forbidden',
                'message': 'Admin privileges required'
            }), 403

        return f(*args, **kwargs)

    return decorated
