"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions. Validation outcomes (revoked,
expired, wrong domain...) are data, not exceptions, and live in
``validations.domain``.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class AuthError(DomainException):
    """Base exception for authentication and authorization errors."""

    pass


class UnauthenticatedError(AuthError):
    """Raised when a request carries no valid bearer credential."""

    def __init__(self, message: str = "Authentication required", code: str = "UNAUTHENTICATED"):
        super().__init__(message, code=code)


class InvalidLoginError(UnauthenticatedError):
    """Raised when an email/password pair does not match."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class ForbiddenError(AuthError):
    """Raised when the caller is outside the scope of an operation."""

    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(message, code="FORBIDDEN")


class InputError(DomainException):
    """Base exception for malformed input."""

    pass


class InvalidDurationError(InputError):
    """Raised when a key lifetime is not a positive whole number of days."""

    def __init__(self, message: str = "Duration must be a positive whole number of days"):
        super().__init__(message, code="INVALID_DURATION")


class MissingFieldError(InputError):
    """Raised when a required field is absent or blank."""

    def __init__(self, field: str):
        super().__init__(f"Field '{field}' is required", code="MISSING_FIELD")
        self.field = field


class InvalidDomainError(InputError):
    """Raised when a whitelist entry is not a usable hostname."""

    def __init__(self, domain: str):
        super().__init__(f"Invalid domain: {domain!r}", code="INVALID_DOMAIN")
        self.domain = domain


class InvalidFieldError(InputError):
    """Raised when a field has a value outside its allowed set."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_FIELD")


class NotFoundError(DomainException):
    """Base exception for missing records."""

    pass


class IdentityNotFoundError(NotFoundError):
    """Raised when an identity is not found."""

    def __init__(self, message: str = "Identity not found"):
        super().__init__(message, code="IDENTITY_NOT_FOUND")


class ProductNotFoundError(NotFoundError):
    """Raised when a product is not found."""

    def __init__(self, message: str = "Product not found"):
        super().__init__(message, code="PRODUCT_NOT_FOUND")


class CredentialNotFoundError(NotFoundError):
    """Raised when a credential is not found."""

    def __init__(self, message: str = "License key not found"):
        super().__init__(message, code="CREDENTIAL_NOT_FOUND")


class ConflictError(DomainException):
    """Base exception for uniqueness violations."""

    pass


class DuplicateKeyError(ConflictError):
    """Raised when no unique key string could be generated."""

    def __init__(self, message: str = "Could not generate a unique license key"):
        super().__init__(message, code="DUPLICATE_KEY")


class KeyStringCollisionError(ConflictError):
    """Raised by the store when a generated key string is already taken."""

    def __init__(self, key_string: str):
        super().__init__("License key string already exists", code="KEY_COLLISION")
        self.key_string = key_string


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when registering an email that already has an identity."""

    def __init__(self, message: str = "Email is already registered"):
        super().__init__(message, code="EMAIL_ALREADY_REGISTERED")


class ProductSlugTakenError(ConflictError):
    """Raised when creating a product with a slug already in use."""

    def __init__(self, message: str = "Product slug is already in use"):
        super().__init__(message, code="PRODUCT_SLUG_TAKEN")


class InfrastructureError(DomainException):
    """Raised when a backing store is unavailable."""

    def __init__(self, message: str = "Service temporarily unavailable"):
        super().__init__(message, code="SERVICE_UNAVAILABLE")
