"""
Service errors - stable error kinds shared by every component.

Every error carries a message and the HTTP status the API layer
renders it with. The app factory registers one handler for the
whole ServiceError tree.
"""


class ServiceError(Exception):
    """Base class for service-layer errors."""
    kind = 'service_error'
    code = 400
    retryable = False
    default_message = 'Request could not be processed'

    def __init__(self, message: str = None, code: int = None):
        self.message = message or self.default_message
        if code is not None:
            self.code = code
        super().__init__(self.message)

    def to_dict(self):
        data = {
            'error': self.kind,
            'message': self.message,
        }
        if self.retryable:
            data['retryable'] = True
        return data


class ValidationError(ServiceError):
    """Missing or malformed required field. Never retried."""
    kind = 'validation_error'
    code = 400
    default_message = 'Invalid request'

    def __init__(self, message: str = None, field: str = None):
        self.field = field
        super().__init__(message)

    def to_dict(self):
        data = super().to_dict()
        if self.field:
            data['field'] = self.field
        return data


class NotFound(ServiceError):
    """Referenced report, comment or user does not exist."""
    kind = 'not_found'
    code = 404
    default_message = 'Resource not found'


class ConflictError(ServiceError):
    """A write lost a uniqueness race against another write."""
    kind = 'conflict'
    code = 409
    default_message = 'Resource already exists'


class UpstreamUnavailable(ServiceError):
    """External content provider unreachable, timed out or rate limited."""
    kind = 'upstream_unavailable'
    code = 503
    retryable = True
    default_message = 'Content provider is unavailable, try again later'


class StorageError(ServiceError):
    """Durable store failure. The message never carries engine detail."""
    kind = 'storage_error'
    code = 500
    default_message = 'Internal storage error'

    def __init__(self, message: str = None):
        super().__init__(self.default_message)
