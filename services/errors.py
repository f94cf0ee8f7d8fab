"""Service error taxonomy.

Each error carries the HTTP status the application boundary maps it to and
a short message that is safe to show to the caller. Dependency failures
keep their cause on ``__cause__`` for logging only.
"""

from __future__ import annotations

from http import HTTPStatus


class ServiceError(Exception):
    """Base class for errors raised by the service layer."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    code: str = "SERVICE_ERROR"
    default_message: str = "Request could not be completed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Bad input shape or length (400)."""

    status_code = HTTPStatus.BAD_REQUEST
    code = "VALIDATION_ERROR"
    default_message = "please provide valid inputs"


class NotFoundError(ServiceError):
    """Requested record does not exist (404)."""

    status_code = HTTPStatus.NOT_FOUND
    code = "NOT_FOUND"
    default_message = "record not found"


class ConflictError(ServiceError):
    """Request conflicts with the current state of a record (409)."""

    status_code = HTTPStatus.CONFLICT
    code = "CONFLICT"
    default_message = "request conflicts with current state"


class AuthorizationError(ServiceError):
    """Missing, invalid or insufficient credentials (401)."""

    status_code = HTTPStatus.UNAUTHORIZED
    code = "AUTHORIZATION_FAILED"
    default_message = "authorization failed"


class ExpiredError(ServiceError):
    """A time-boxed secret is past its expiry (400)."""

    status_code = HTTPStatus.BAD_REQUEST
    code = "EXPIRED"
    default_message = "expired"


class DependencyError(ServiceError):
    """Persistence or notification collaborator failed (500)."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    code = "DEPENDENCY_FAILED"
    default_message = "internal error"


# Credentials


class WeakPasswordError(ValidationError):
    code = "WEAK_PASSWORD"
    default_message = "password length should be at least 7 characters long"


class PasswordMismatchError(AuthorizationError):
    code = "PASSWORD_MISMATCH"
    default_message = "password does not match"


# Tokens


class MissingClaimsError(ValidationError):
    code = "MISSING_CLAIMS"
    default_message = "required inputs are missing to generate a token"


class MalformedTokenError(AuthorizationError):
    code = "MALFORMED_TOKEN"
    default_message = "authorization header is malformed"


class WrongSchemeError(AuthorizationError):
    code = "WRONG_SCHEME"
    default_message = "authorization scheme must be Bearer"


class BadSignatureError(AuthorizationError):
    code = "BAD_SIGNATURE"
    default_message = "invalid token signature"


class TokenExpiredError(AuthorizationError):
    code = "TOKEN_EXPIRED"
    default_message = "token is expired"


class InvalidClaimsError(AuthorizationError):
    code = "INVALID_CLAIMS"
    default_message = "token verification failed"


class RoleRequiredError(AuthorizationError):
    code = "ROLE_REQUIRED"
    default_message = "please join seller program to manage products"


class OwnershipError(AuthorizationError):
    code = "NOT_OWNER"
    default_message = "you do not have manage rights of this product"


# Accounts


class DuplicateEmailError(ConflictError):
    code = "DUPLICATE_EMAIL"
    default_message = "a user with that email already exists"


class AlreadyVerifiedError(ConflictError):
    code = "ALREADY_VERIFIED"
    default_message = "user already verified"


class AlreadySellerError(ConflictError):
    code = "ALREADY_SELLER"
    default_message = "you have already joined the seller program"


class CodeMismatchError(ValidationError):
    code = "CODE_MISMATCH"
    default_message = "verification code does not match"


class CodeExpiredError(ExpiredError):
    code = "CODE_EXPIRED"
    default_message = "verification code expired"


class CodeGenerationError(DependencyError):
    code = "CODE_GENERATION_FAILED"
    default_message = "unable to generate verification code"


class NotificationError(DependencyError):
    code = "NOTIFICATION_FAILED"
    default_message = "error on sending sms"


class PersistenceError(DependencyError):
    code = "PERSISTENCE_FAILED"
    default_message = "unable to save changes"
