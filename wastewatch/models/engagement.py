"""
Engagement models - likes and comments on reports.
"""

from datetime import datetime
from ..extensions import db


class ReportLike(db.Model):
    """One like per (report, user). Removed on unlike, never updated."""
    __tablename__ = 'report_likes'

    id = db.Column(db.Integer, primary_key=True)
    report_id = db.Column(
        db.Integer,
        db.ForeignKey('reports.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )
    user_id = db.Column(
        db.Integer,
        db.ForeignKey('users.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.UniqueConstraint('report_id', 'user_id', name='uq_report_like'),
    )

    def __repr__(self):
        return f'<ReportLike report={self.report_id} user={self.user_id}>'


class ReportComment(db.Model):
    """Append-only comment."""
    __tablename__ = 'report_comments'

    id = db.Column(db.Integer, primary_key=True)
    report_id = db.Column(
        db.Integer,
        db.ForeignKey('reports.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )
    user_id = db.Column(
        db.Integer,
        db.ForeignKey('users.id', ondelete='CASCADE'),
        nullable=False
    )
    text = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    author = db.relationship('User')

    def __repr__(self):
        return f'<ReportComment {self.id} on report {self.report_id}>'

    def to_dict(self):
        return {
            'id': self.id,
            'report_id': self.report_id,
            'user_id': self.user_id,
            'author_name': self.author.name if self.author else None,
            'text': self.text,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
