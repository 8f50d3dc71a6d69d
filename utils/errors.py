"""Error taxonomy shared by services and routes.

Services raise these; ``create_app`` turns them into JSON responses. Anything
that is not an ``AppError`` is treated as an infrastructure failure.
"""


class AppError(Exception):
    status_code = 400
    code = 'error'
    retryable = False

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        payload = {'error': self.message, 'code': self.code}
        if self.retryable:
            payload['retryable'] = True
        return payload


class ValidationError(AppError):
    """Invalid request data"""
    code = 'validation_error'


class PasswordMismatch(AppError):
    """New password and confirm password do not match"""
    code = 'password_mismatch'


class InvalidOrExpiredToken(AppError):
    """Invalid or expired token"""
    code = 'invalid_or_expired_token'


class InvalidCredentials(AppError):
    """Invalid email or password"""
    status_code = 401
    code = 'invalid_credentials'


class Unauthorized(AppError):
    """Authentication required"""
    status_code = 401
    code = 'unauthorized'


class InvalidToken(AppError):
    """Invalid session token"""
    status_code = 401
    code = 'invalid_token'


class ExpiredToken(AppError):
    """Session token has expired"""
    status_code = 401
    code = 'expired_token'


class CrossTenantAccess(AppError):
    """Resource does not belong to your workspace"""
    status_code = 403
    code = 'cross_tenant_access'


class SelfDeleteForbidden(AppError):
    """Cannot delete your own account"""
    status_code = 403
    code = 'self_delete_forbidden'


class NotFound(AppError):
    """Resource not found"""
    status_code = 404
    code = 'not_found'


class NoTenant(AppError):
    """A company is required for this operation"""
    status_code = 409
    code = 'no_tenant'


class AlreadyHasTenant(AppError):
    """User already has a company assigned"""
    status_code = 409
    code = 'already_has_tenant'


class DuplicateRole(AppError):
    """Role with this name already exists in your workspace"""
    status_code = 409
    code = 'duplicate_role'


class EmailTaken(AppError):
    """User with this email already exists"""
    status_code = 409
    code = 'email_taken'


class RoleInUse(AppError):
    """Cannot delete role that is assigned to users"""
    status_code = 409
    code = 'role_in_use'


class ServiceUnavailable(AppError):
    """Service temporarily unavailable, please retry"""
    status_code = 503
    code = 'service_unavailable'
    retryable = True


class AdminRequired(AppError):
    """Only company admins can perform this operation"""
    status_code = 403
    code = 'admin_required'


def require_json_object(data):
    """Request payload as a dict; a missing body reads as empty."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data
