from typing import Any, Dict, Optional


class StorefrontError(Exception):
    """Base error. `message` is what the customer should be shown."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}


class ValidationFailed(StorefrontError):
    pass


class AlreadyInWishlist(ValidationFailed):
    pass


class AuthenticationRequired(StorefrontError):
    pass


class VerificationRequired(StorefrontError):
    def __init__(self, message: str, email: Optional[str] = None):
        super().__init__(message)
        self.email = email


class SessionExpired(StorefrontError):
    pass


class ServerRejected(StorefrontError):
    pass


class AccountSuspended(ServerRejected):

    @property
    def reason(self) -> Optional[str]:
        return self.payload.get("suspensionReason")

    @property
    def suspended_at(self) -> Optional[str]:
        return self.payload.get("suspendedAt")


class ServiceUnavailable(StorefrontError):
    pass
