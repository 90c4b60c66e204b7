"""
Report model - a user-submitted waste/pollution incident.

city/state are a snapshot of the owner's profile taken when the
report is created. They are never recomputed afterwards, even if
the owner moves.
"""

import enum
from datetime import datetime
from ..extensions import db
from .user import CITY_MAX_LENGTH


class ReportCategory(enum.Enum):
    """Waste type."""
    PLASTIC = 'plastic'
    ELECTRONIC = 'electronic'
    INDUSTRIAL = 'industrial'
    ORGANIC = 'organic'
    HAZARDOUS = 'hazardous'
    MEDICAL = 'medical'
    OTHER = 'other'


class ReportSeverity(enum.Enum):
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'
    CRITICAL = 'critical'


class ReportStatus(enum.Enum):
    """
    OPEN - submitted, nobody looked at it yet
    IN_PROGRESS - cleanup under way
    RESOLVED - cleaned up
    REJECTED - not actionable
    """
    OPEN = 'open'
    IN_PROGRESS = 'in_progress'
    RESOLVED = 'resolved'
    REJECTED = 'rejected'


class Report(db.Model):
    """Waste/pollution incident report."""
    __tablename__ = 'reports'

    id = db.Column(db.Integer, primary_key=True)

    # Owner - immutable after creation
    user_id = db.Column(
        db.Integer,
        db.ForeignKey('users.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )

    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    category = db.Column(db.Enum(ReportCategory), nullable=False)
    severity = db.Column(
        db.Enum(ReportSeverity),
        default=ReportSeverity.MEDIUM,
        nullable=False,
        index=True
    )
    image_url = db.Column(db.String(255))  # Reference only, storage is external

    # Location snapshot
    state = db.Column(db.String(50), nullable=False)
    city = db.Column(db.String(CITY_MAX_LENGTH), nullable=False, index=True)
    latitude = db.Column(db.Numeric(10, 8))
    longitude = db.Column(db.Numeric(11, 8))

    status = db.Column(
        db.Enum(ReportStatus),
        default=ReportStatus.OPEN,
        nullable=False
    )

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    author = db.relationship('User', backref=db.backref('reports', lazy='dynamic', passive_deletes=True))
    likes = db.relationship(
        'ReportLike',
        backref='report',
        lazy='dynamic',
        passive_deletes=True
    )
    comments = db.relationship(
        'ReportComment',
        backref='report',
        lazy='dynamic',
        passive_deletes=True,
        order_by='ReportComment.id'
    )

    __table_args__ = (
        db.Index('idx_report_city_date', 'city', 'created_at'),
    )

    def __repr__(self):
        return f'<Report {self.id}: {self.city} {self.category.value}>'

    def to_dict(self, like_count=None, comment_count=None, author_name=None):
        """Serializes the report for the API."""
        data = {
            'id': self.id,
            'user_id': self.user_id,
            'title': self.title,
            'description': self.description,
            'category': self.category.value,
            'severity': self.severity.value,
            'image_url': self.image_url,
            'state': self.state,
            'city': self.city,
            'latitude': float(self.latitude) if self.latitude is not None else None,
            'longitude': float(self.longitude) if self.longitude is not None else None,
            'status': self.status.value,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
        if author_name is not None:
            data['author_name'] = author_name
        if like_count is not None:
            data['likes'] = like_count
        if comment_count is not None:
            data['comments'] = comment_count
        return data
