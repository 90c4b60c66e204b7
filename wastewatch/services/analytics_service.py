"""
Analytics Service - city statistics and contributor leaderboard.

Everything is computed at call time from reports, likes and users.
There is no snapshot table: results reflect whatever is committed
when the queries run, without point-in-time isolation across them.
"""

import logging
from typing import List

from flask import current_app
from sqlalchemy import func

from ..extensions import db
from ..models import (
    User, Report, ReportLike,
    ReportCategory, ReportSeverity, ReportStatus
)
from .report_service import clamp_non_negative, require_city

logger = logging.getLogger(__name__)


def _zero_filled(enum_cls, rows) -> dict:
    """{value: count} for every enum member, zeros included."""
    counts = {member.value: 0 for member in enum_cls}
    for member, count in rows:
        counts[member.value] = count
    return counts


class AnalyticsService:

    def city_stats(self, city: str) -> dict:
        """
        Aggregate counts for a city.

        Returns:
            {
                'city', 'total_reports', 'active_users',
                'per_category_counts', 'per_severity_counts',
                'per_status_counts', 'high_severity_count'
            }

        Raises:
            ValidationError: blank or over-long city
        """
        city = require_city(city)
        total_reports = db.session.query(func.count(Report.id)).filter(
            Report.city == city
        ).scalar()

        active_users = db.session.query(func.count(User.id)).filter(
            User.city == city
        ).scalar()

        per_category = _zero_filled(
            ReportCategory,
            db.session.query(Report.category, func.count(Report.id))
            .filter(Report.city == city)
            .group_by(Report.category)
            .all()
        )
        per_severity = _zero_filled(
            ReportSeverity,
            db.session.query(Report.severity, func.count(Report.id))
            .filter(Report.city == city)
            .group_by(Report.severity)
            .all()
        )
        per_status = _zero_filled(
            ReportStatus,
            db.session.query(Report.status, func.count(Report.id))
            .filter(Report.city == city)
            .group_by(Report.status)
            .all()
        )

        return {
            'city': city,
            'total_reports': total_reports,
            'active_users': active_users,
            'per_category_counts': per_category,
            'per_severity_counts': per_severity,
            'per_status_counts': per_status,
            'high_severity_count': per_severity[ReportSeverity.HIGH.value],
        }

    def leaderboard(self, city: str, top_n=None) -> List[dict]:
        """
        Top contributors among users whose home city is `city`.

        contribution_count only counts reports filed in `city`;
        total_likes_received counts likes on all of the user's reports,
        whatever their city. Ordered by contribution_count desc, then
        total_likes_received desc, then user id.
        """
        city = require_city(city)
        default_size = current_app.config.get('LEADERBOARD_SIZE', 10)
        max_size = current_app.config.get('MAX_PAGE_SIZE', 100)
        top_n = min(clamp_non_negative(top_n, default_size), max_size)

        contributions = (
            db.session.query(
                Report.user_id.label('user_id'),
                func.count(Report.id).label('contribution_count')
            )
            .filter(Report.city == city)
            .group_by(Report.user_id)
            .subquery()
        )
        likes_received = (
            db.session.query(
                Report.user_id.label('user_id'),
                func.count(ReportLike.id).label('total_likes')
            )
            .join(ReportLike, ReportLike.report_id == Report.id)
            .group_by(Report.user_id)
            .subquery()
        )

        contribution_count = func.coalesce(contributions.c.contribution_count, 0)
        total_likes = func.coalesce(likes_received.c.total_likes, 0)

        rows = (
            db.session.query(
                User.id,
                User.name,
                contribution_count.label('contribution_count'),
                total_likes.label('total_likes_received'),
            )
            .outerjoin(contributions, contributions.c.user_id == User.id)
            .outerjoin(likes_received, likes_received.c.user_id == User.id)
            .filter(User.city == city)
            .order_by(contribution_count.desc(), total_likes.desc(), User.id.asc())
            .limit(top_n)
            .all()
        )

        return [
            {
                'user_id': user_id,
                'name': name,
                'contribution_count': int(contribution),
                'total_likes_received': int(likes),
            }
            for user_id, name, contribution, likes in rows
        ]


# Singleton
analytics_service = AnalyticsService()
