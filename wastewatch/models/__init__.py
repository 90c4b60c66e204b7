"""
SQLAlchemy models for WasteWatch.

Every model is exported here so it can be imported from
wastewatch.models.
"""

from .user import User, UserRole, CITY_MAX_LENGTH
from .report import Report, ReportCategory, ReportSeverity, ReportStatus
from .engagement import ReportLike, ReportComment
from .content_cache import CachedContent, ContentKind

__all__ = [
    'User',
    'UserRole',
    'CITY_MAX_LENGTH',
    'Report',
    'ReportCategory',
    'ReportSeverity',
    'ReportStatus',
    'ReportLike',
    'ReportComment',
    'CachedContent',
    'ContentKind',
]
