"""
Services - business logic layer.

Services hold the domain logic, separated from the API layer.
"""

from .errors import (
    ServiceError, ValidationError, NotFound, ConflictError,
    UpstreamUnavailable, StorageError
)
from .report_service import report_service, ReportService
from .engagement_service import engagement_service, EngagementService
from .analytics_service import analytics_service, AnalyticsService
from .content_cache_service import content_cache_service, ContentCacheService, ContentResult
from .content_provider import GeminiContentProvider
from .auth_service import auth_service, AuthService, AuthError

__all__ = [
    'ServiceError',
    'ValidationError',
    'NotFound',
    'ConflictError',
    'UpstreamUnavailable',
    'StorageError',
    'report_service',
    'ReportService',
    'engagement_service',
    'EngagementService',
    'analytics_service',
    'AnalyticsService',
    'content_cache_service',
    'ContentCacheService',
    'ContentResult',
    'GeminiContentProvider',
    'auth_service',
    'AuthService',
    'AuthError',
]
