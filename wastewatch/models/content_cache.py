"""
CachedContent model - externally generated content kept per city.

Rows are written by the refill path and never updated. Staleness is
decided at read time from created_at, so old rows may simply stay.
"""

import enum
import json
from datetime import datetime
from ..extensions import db
from .user import CITY_MAX_LENGTH


class ContentKind(enum.Enum):
    NEWS = 'news'
    POLLUTION = 'pollution'


class CachedContent(db.Model):
    """One parsed content item for a city."""
    __tablename__ = 'cached_content'

    id = db.Column(db.Integer, primary_key=True)
    city = db.Column(db.String(CITY_MAX_LENGTH), nullable=False, index=True)
    kind = db.Column(db.Enum(ContentKind), default=ContentKind.NEWS, nullable=False)
    content = db.Column(db.Text, nullable=False)  # JSON text of a single item
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    __table_args__ = (
        db.Index('idx_cached_content_lookup', 'city', 'kind', 'created_at'),
    )

    def __repr__(self):
        return f'<CachedContent {self.id}: {self.city}/{self.kind.value}>'

    @property
    def payload(self):
        """Decoded item. Rows written by hand may hold plain text."""
        try:
            return json.loads(self.content)
        except (TypeError, ValueError):
            return {'description': self.content}

    def to_dict(self):
        return {
            'id': self.id,
            'city': self.city,
            'kind': self.kind.value,
            'content': self.payload,
            'timestamp': self.created_at.isoformat() if self.created_at else None,
        }
