"""
Engagement Service - likes and comments on reports.

Like uniqueness per (report, user) is enforced by the database
(uq_report_like), not by application locks. Two concurrent toggles
from the same user cannot both insert; the loser ends up as a no-op
in the state the winner produced.
"""

import logging
from typing import List

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from ..extensions import db, atomic
from ..models import Report, ReportLike, ReportComment
from .errors import ValidationError, NotFound, ConflictError

logger = logging.getLogger(__name__)


class EngagementService:
    """Likes (toggle semantics) and append-only comments."""

    def _require_report(self, report_id: int) -> Report:
        report = db.session.get(Report, report_id)
        if not report:
            raise NotFound('Report not found')
        return report

    def toggle_like(self, report_id: int, user_id: int) -> dict:
        """
        Flips the like for (report, user).

        Returns:
            {'liked': True} if the like exists afterwards, else {'liked': False}

        Raises:
            NotFound: report does not exist
        """
        self._require_report(report_id)

        existing = ReportLike.query.filter_by(report_id=report_id, user_id=user_id).first()
        if existing:
            with atomic():
                removed = ReportLike.query.filter_by(
                    report_id=report_id, user_id=user_id
                ).delete(synchronize_session=False)
            # removed == 0: a concurrent toggle already deleted it
            logger.debug('Unlike report=%s user=%s removed=%s', report_id, user_id, removed)
            return {'liked': False}

        try:
            self._insert_like(report_id, user_id)
        except ConflictError:
            logger.debug('Like race on report=%s user=%s resolved as no-op', report_id, user_id)
            return {'liked': True}

        logger.debug('Like report=%s user=%s', report_id, user_id)
        return {'liked': True}

    def _insert_like(self, report_id: int, user_id: int):
        """Inserts the like; a duplicate-key race surfaces as ConflictError."""
        try:
            with atomic():
                db.session.add(ReportLike(report_id=report_id, user_id=user_id))
        except IntegrityError:
            exists = ReportLike.query.filter_by(report_id=report_id, user_id=user_id).first()
            if exists is None:
                # Not a uniqueness race (e.g. the report vanished meanwhile)
                self._require_report(report_id)
                raise
            raise ConflictError('Like already exists')

    def has_liked(self, report_id: int, user_id: int) -> bool:
        return db.session.query(
            ReportLike.query.filter_by(report_id=report_id, user_id=user_id).exists()
        ).scalar()

    def like_count(self, report_id: int) -> int:
        self._require_report(report_id)
        return db.session.query(func.count(ReportLike.id)).filter(
            ReportLike.report_id == report_id
        ).scalar()

    def add_comment(self, report_id: int, user_id: int, text: str) -> ReportComment:
        """
        Appends a comment.

        Raises:
            ValidationError: empty text
            NotFound: report does not exist
        """
        if text is None or not str(text).strip():
            raise ValidationError('text is required', field='text')
        self._require_report(report_id)

        comment = ReportComment(report_id=report_id, user_id=user_id, text=str(text).strip())
        with atomic():
            db.session.add(comment)

        logger.info('Comment %s added to report %s by user %s', comment.id, report_id, user_id)
        return comment

    def comments_for(self, report_id: int) -> List[ReportComment]:
        """Comments in creation order."""
        self._require_report(report_id)
        return ReportComment.query.filter_by(report_id=report_id).order_by(
            ReportComment.created_at.asc(), ReportComment.id.asc()
        ).all()


# Singleton
engagement_service = EngagementService()
