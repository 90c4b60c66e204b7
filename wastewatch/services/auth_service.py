"""
Auth Service - signup, login and profile updates.

This is the identity side of the system. The report, engagement,
analytics and content services only ever see the resulting user id
and the {user_id, name, state, city} identity.
"""

import logging
from datetime import datetime
from typing import Optional, Tuple

from flask import current_app
from sqlalchemy.exc import IntegrityError

from ..extensions import db, atomic
from ..models import User, UserRole
from ..api.middleware.jwt_utils import create_access_token
from .errors import ServiceError, ValidationError, ConflictError, NotFound
from .report_service import require_text, require_city

logger = logging.getLogger(__name__)


class AuthError(ServiceError):
    """Bad credentials or unusable identity."""
    kind = 'unauthorized'
    code = 401
    default_message = 'Invalid email or password'


class AuthService:
    """
    Methods for:
    - Registering a resident
    - Logging in (bearer token)
    - Updating the profile (name, bio, home location)
    """

    def register(
        self,
        name: str,
        email: str,
        password: str,
        confirm_password: str,
        state: str,
        city: str
    ) -> User:
        """
        Registers a resident.

        Raises:
            ValidationError: passwords differ or password too short
            ConflictError: email already registered
        """
        if password != confirm_password:
            raise ValidationError('Passwords do not match', field='confirm_password')

        min_length = current_app.config.get('MIN_PASSWORD_LENGTH', 6)
        if len(password) < min_length:
            raise ValidationError(
                f'Password must be at least {min_length} characters',
                field='password'
            )

        email = email.strip().lower()
        if User.query.filter_by(email=email).first():
            raise ConflictError('Email already registered')

        user = User(
            name=name.strip(),
            email=email,
            state=state.strip(),
            city=city.strip(),
            role=UserRole.CITIZEN,
        )
        user.set_password(password)

        try:
            with atomic():
                db.session.add(user)
        except IntegrityError:
            # Lost a race with a concurrent signup for the same email
            raise ConflictError('Email already registered')

        logger.info('User %s registered (%s, %s)', user.id, user.city, user.state)
        return user

    def login(self, email: str, password: str) -> Tuple[User, str]:
        """
        Returns (user, access_token).

        Raises:
            AuthError: unknown email or wrong password
        """
        user = User.query.filter_by(email=email.strip().lower()).first()
        if not user or not user.check_password(password):
            raise AuthError()

        token = create_access_token(user.id, user.name, user.state, user.city)
        return user, token

    def update_profile(
        self,
        user_id: int,
        name: Optional[str] = None,
        bio: Optional[str] = None,
        state: Optional[str] = None,
        city: Optional[str] = None,
        profile_picture: Optional[str] = None
    ) -> User:
        """
        Updates profile fields. Moving to another city does not move
        the user's existing reports.

        Raises:
            ValidationError: blank name/state/city or over-long city
            NotFound: user does not exist
        """
        user = db.session.get(User, user_id)
        if not user:
            raise NotFound('User not found')

        if name is not None:
            name = require_text(name, 'name')
        if state is not None:
            state = require_text(state, 'state')
        if city is not None:
            city = require_city(city)

        with atomic():
            if name is not None:
                user.name = name
            if bio is not None:
                user.bio = bio
            if state is not None:
                user.state = state
            if city is not None:
                user.city = city
            if profile_picture is not None:
                user.profile_picture = profile_picture
            user.updated_at = datetime.utcnow()

        return user

    def set_role(self, email: str, role: UserRole) -> User:
        """Used by the create-admin CLI command."""
        user = User.query.filter_by(email=email.strip().lower()).first()
        if not user:
            raise NotFound('User not found')
        with atomic():
            user.role = role
        return user


# Singleton
auth_service = AuthService()
