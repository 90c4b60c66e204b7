"""
Report Service - durable record of waste/pollution reports.

Reports are scoped by the city/state of their owner at creation
time. Creating or reading reports never touches likes or comments.
"""

import logging
from datetime import datetime
from typing import Optional, Tuple, List

from flask import current_app
from sqlalchemy import func

from ..extensions import db, atomic
from ..models import (
    CITY_MAX_LENGTH, User, Report, ReportLike, ReportComment,
    ReportCategory, ReportSeverity, ReportStatus
)
from .errors import ValidationError, NotFound

logger = logging.getLogger(__name__)


def parse_enum(enum_cls, value, field: str):
    """
    Maps a client value ('plastic', 'PLASTIC', ReportCategory.PLASTIC)
    onto the enum. Raises ValidationError naming the field otherwise.
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        for member in enum_cls:
            if member.value == normalized:
                return member
    allowed = ', '.join(m.value for m in enum_cls)
    raise ValidationError(f'{field} must be one of: {allowed}', field=field)


def clamp_non_negative(value, default: int = 0) -> int:
    """Coerces pagination input to a non-negative int."""
    try:
        value = int(value)
    except (TypeError, ValueError):
        return default
    return max(value, 0)


def page_bounds(limit=None, offset=None) -> Tuple[int, int]:
    """
    (limit, offset) actually used for a listing: non-negative ints,
    limit capped at MAX_PAGE_SIZE.
    """
    default_limit = current_app.config.get('DEFAULT_PAGE_SIZE', 20)
    max_limit = current_app.config.get('MAX_PAGE_SIZE', 100)
    return (
        min(clamp_non_negative(limit, default_limit), max_limit),
        clamp_non_negative(offset, 0),
    )


def require_city(city) -> str:
    """
    City name from a path or query parameter, stripped.

    Raises ValidationError if it is blank or longer than the city
    columns allow.
    """
    if city is None or not str(city).strip():
        raise ValidationError('city is required', field='city')
    city = str(city).strip()
    if len(city) > CITY_MAX_LENGTH:
        raise ValidationError(
            f'city must be at most {CITY_MAX_LENGTH} characters',
            field='city'
        )
    return city


def require_text(value, field: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f'{field} is required', field=field)
    return str(value).strip()


class ReportService:
    """
    Report lifecycle:
    - create_report: owner submits, location copied from the profile
    - list_by_city / get: reads
    - update_status: administrative transition
    """

    def create_report(
        self,
        owner_id: int,
        title: str,
        description: str,
        category,
        severity=None,
        image_url: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None
    ) -> Report:
        """
        Creates a report owned by owner_id.

        city/state are read from the owner's profile right now and
        frozen on the report.

        Raises:
            ValidationError: title, description or category missing/invalid
            NotFound: owner does not exist
        """
        title = require_text(title, 'title')
        description = require_text(description, 'description')
        if category is None or (isinstance(category, str) and not category.strip()):
            raise ValidationError('category is required', field='category')
        category = parse_enum(ReportCategory, category, 'category')

        if severity is None or (isinstance(severity, str) and not severity.strip()):
            severity = ReportSeverity.MEDIUM
        else:
            severity = parse_enum(ReportSeverity, severity, 'severity')

        owner = db.session.get(User, owner_id)
        if not owner:
            raise NotFound('User not found')

        report = Report(
            user_id=owner.id,
            title=title,
            description=description,
            category=category,
            severity=severity,
            image_url=image_url or None,
            state=owner.state,
            city=owner.city,
            latitude=latitude,
            longitude=longitude,
            status=ReportStatus.OPEN,
        )

        with atomic():
            db.session.add(report)

        logger.info(
            'Report %s created by user %s in %s (%s/%s)',
            report.id, owner.id, report.city,
            report.category.value, report.severity.value
        )
        return report

    def get(self, report_id: int) -> Report:
        """Raises NotFound if the report does not exist."""
        report = db.session.get(Report, report_id)
        if not report:
            raise NotFound('Report not found')
        return report

    def list_by_city(self, city: str, limit=None, offset=None) -> Tuple[List[dict], int]:
        """
        Page of reports for a city, newest first, plus the total count.

        limit/offset are clamped to non-negative ints; limit is also
        capped at MAX_PAGE_SIZE.

        Raises:
            ValidationError: blank or over-long city
        """
        city = require_city(city)
        limit, offset = page_bounds(limit, offset)

        total = db.session.query(func.count(Report.id)).filter(Report.city == city).scalar()

        like_counts = (
            db.session.query(
                ReportLike.report_id.label('report_id'),
                func.count(ReportLike.id).label('likes')
            )
            .group_by(ReportLike.report_id)
            .subquery()
        )
        comment_counts = (
            db.session.query(
                ReportComment.report_id.label('report_id'),
                func.count(ReportComment.id).label('comments')
            )
            .group_by(ReportComment.report_id)
            .subquery()
        )

        rows = (
            db.session.query(
                Report,
                User.name,
                func.coalesce(like_counts.c.likes, 0),
                func.coalesce(comment_counts.c.comments, 0),
            )
            .join(User, User.id == Report.user_id)
            .outerjoin(like_counts, like_counts.c.report_id == Report.id)
            .outerjoin(comment_counts, comment_counts.c.report_id == Report.id)
            .filter(Report.city == city)
            .order_by(Report.created_at.desc(), Report.id.desc())
            .limit(limit)
            .offset(offset)
            .all()
        )

        reports = [
            report.to_dict(like_count=likes, comment_count=comments, author_name=name)
            for report, name, likes, comments in rows
        ]
        return reports, total

    def update_status(self, report_id: int, status) -> Report:
        """
        Moves a report to a new status. Only status and updated_at
        change; owner and location stay as they were.
        """
        status = parse_enum(ReportStatus, status, 'status')
        report = self.get(report_id)

        previous = report.status
        with atomic():
            report.status = status
            report.updated_at = datetime.utcnow()

        logger.info('Report %s status %s -> %s', report.id, previous.value, status.value)
        return report


# Singleton
report_service = ReportService()
