"""
Auth API - signup, login and the current user's profile.
"""

from flask import Blueprint, g

from ..services.auth_service import auth_service
from .middleware.auth import jwt_required
from .schemas import parse_body
from .schemas.auth import SignupRequest, LoginRequest, ProfileUpdate

bp = Blueprint('auth', __name__, url_prefix='/auth')


@bp.route('/signup', methods=['POST'])
def signup():
    """Registers a resident. Login is a separate call."""
    data = parse_body(SignupRequest)
    user = auth_service.register(
        name=data.name,
        email=data.email,
        password=data.password,
        confirm_password=data.confirm_password,
        state=data.state,
        city=data.city,
    )
    return {
        'success': True,
        'message': 'Registration successful. Please login.',
        'user_id': user.id,
    }, 201


@bp.route('/login', methods=['POST'])
def login():
    data = parse_body(LoginRequest)
    user, token = auth_service.login(data.email, data.password)
    return {
        'success': True,
        'message': 'Login successful',
        'token': token,
        'user': user.to_dict(),
    }, 200


@bp.route('/me', methods=['GET'])
@jwt_required
def me():
    return {'user': g.current_user.to_dict()}, 200


@bp.route('/me', methods=['PUT'])
@jwt_required
def update_me():
    """Profile update. Existing reports keep their original city."""
    data = parse_body(ProfileUpdate)
    user = auth_service.update_profile(
        g.current_user_id,
        **data.model_dump(exclude_unset=True)
    )
    return {'success': True, 'user': user.to_dict()}, 200
