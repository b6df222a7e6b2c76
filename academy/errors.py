"""
Error taxonomy shared by the services and the HTTP layer.

Every error carries the HTTP status the route layer answers with, so the
blueprints never translate exceptions by hand.
"""


class AcademyError(Exception):
    """Base class for errors that map onto a JSON error response."""

    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {'message': self.message}


class ValidationError(AcademyError):
    """Malformed or out-of-enumeration input."""

    status_code = 400
    default_message = 'Invalid request data'

    def __init__(self, message=None, errors=None, allowed_values=None):
        super().__init__(message)
        self.errors = errors or []
        self.allowed_values = list(allowed_values) if allowed_values else None

    @classmethod
    def from_pydantic(cls, exc, message=None):
        """Build from a pydantic ValidationError, one entry per offending field."""
        errors = []
        for err in exc.errors():
            field = '.'.join(str(part) for part in err.get('loc', ())) or None
            errors.append({'field': field, 'message': err.get('msg', 'Invalid value')})
        return cls(message, errors=errors)

    @property
    def fields(self):
        return [e['field'] for e in self.errors if e.get('field')]

    def to_dict(self):
        body = super().to_dict()
        if self.errors:
            body['errors'] = self.errors
        if self.allowed_values is not None:
            body['allowedValues'] = self.allowed_values
        return body


class AuthenticationError(AcademyError):
    """No session, or a session that does not resolve to an account."""

    status_code = 401
    default_message = 'Authentication required'


class AuthorizationError(AcademyError):
    """Valid session without the required privilege."""

    status_code = 403
    default_message = 'Admin access required'


class NotFoundError(AcademyError):
    status_code = 404
    default_message = 'Resource not found'


class PersistenceError(AcademyError):
    """I/O failure against the backing store."""

    status_code = 500
    default_message = 'Internal server error'


class ConfigurationError(RuntimeError):
    """Raised at start-up when the deployment is unsafe to run."""
