"""
User model - residents who report and engage.

Users are owned by the identity layer. The rest of the system only
reads their id, name and home state/city.
"""

import enum
from datetime import datetime
import bcrypt
from ..extensions import db

# Shared by users, reports and cached_content
CITY_MAX_LENGTH = 50


class UserRole(enum.Enum):
    """
    CITIZEN - reports and engages
    ADMIN - may also move reports through their status lifecycle
    """
    CITIZEN = 'citizen'
    ADMIN = 'admin'


class User(db.Model):
    """Registered resident. Home city drives leaderboard membership."""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)

    # Auth
    email = db.Column(db.String(100), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    # Profile
    name = db.Column(db.String(100), nullable=False)
    state = db.Column(db.String(50), nullable=False, index=True)
    city = db.Column(db.String(CITY_MAX_LENGTH), nullable=False, index=True)
    profile_picture = db.Column(db.String(255))
    bio = db.Column(db.Text)

    role = db.Column(
        db.Enum(UserRole),
        default=UserRole.CITIZEN,
        nullable=False
    )

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.Index('idx_user_city_state', 'city', 'state'),
    )

    def __repr__(self):
        return f'<User {self.id}: {self.email}>'

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN

    def set_password(self, password):
        """Hashes and stores the password with bcrypt."""
        password_bytes = password.encode('utf-8')
        salt = bcrypt.gensalt()
        self.password_hash = bcrypt.hashpw(password_bytes, salt).decode('utf-8')

    def check_password(self, password):
        """True if the password matches the stored hash."""
        if not self.password_hash:
            return False
        password_bytes = password.encode('utf-8')
        hash_bytes = self.password_hash.encode('utf-8')
        return bcrypt.checkpw(password_bytes, hash_bytes)

    def to_identity(self):
        """The identity view handed to the core: {user_id, name, state, city}."""
        return {
            'user_id': self.id,
            'name': self.name,
            'state': self.state,
            'city': self.city,
        }

    def to_dict(self):
        data = self.to_identity()
        data.update({
            'id': self.id,
            'email': self.email,
            'bio': self.bio,
            'profile_picture': self.profile_picture,
            'role': self.role.value,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        })
        return data
