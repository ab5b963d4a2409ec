import logging
from typing import Any, Dict, Optional

from storefront.events import AuthEvent, EventBus
from storefront.exceptions import (
    AccountSuspended,
    AuthenticationRequired,
    StorefrontError,
    VerificationRequired,
)
from storefront.schemas.user_schemas import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    User,
)
from storefront.services.api_client import ApiClient
from storefront.services.local_storage import LocalStorage

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"


class AuthSession:
    """
    Logged-in principal and token.

    On login the token is committed to the API client's Authorization header
    first (which sets `api.auth_ready`) and only then is LOGIN emitted, so
    listeners can issue authenticated requests straight away.
    """

    def __init__(self, api: ApiClient, storage: LocalStorage, events: EventBus):
        self.api = api
        self.storage = storage
        self.events = events

        self.user: Optional[User] = None
        self.token: Optional[str] = storage.get_item(TOKEN_KEY)
        self.is_authenticated = False

        self.api.on_suspended(self._on_suspended)

    def close(self) -> None:
        self.api.off_suspended(self._on_suspended)

    # -------------------------
    # State transitions
    # -------------------------
    def _login_success(self, token: str, user: User) -> None:
        self.storage.set_item(TOKEN_KEY, token)
        self.token = token
        self.user = user
        self.is_authenticated = True
        self.api.set_token(token)
        self.events.emit(AuthEvent.LOGIN, user)

    def _clear_session(self) -> None:
        self.api.clear_token()
        self.storage.remove_item(TOKEN_KEY)
        self.token = None
        self.user = None
        self.is_authenticated = False

    def _end_session(self) -> None:
        # listeners run while the old authorization context is still in place;
        # the session is cleared even if one of them fails
        try:
            self.events.emit(AuthEvent.LOGOUT)
        except Exception as e:
            logger.error(f"Logout listener failed, forcing logout: {e}")
        finally:
            self._clear_session()

    def _on_suspended(self, payload: Dict[str, Any]) -> None:
        if not (self.is_authenticated or self.token):
            return
        logger.warning("Your account has been suspended. Please contact support.")
        self._end_session()

    # -------------------------
    # Operations
    # -------------------------
    def restore(self) -> Optional[User]:
        """Revalidate a stored token. Any failure discards it; there is no retry."""
        if not self.token:
            return None

        self.api.set_token(self.token)
        try:
            data = self.api.get("/api/auth/me", error_message="Failed to load user")
            user = User.model_validate(data["user"])
        except (StorefrontError, KeyError, ValueError) as e:
            logger.warning(f"Failed to load user, clearing token: {e}")
            self._clear_session()
            return None

        self.user = user
        self.is_authenticated = True
        self.events.emit(AuthEvent.LOGIN, user)
        return user

    def login(self, email: str, password: str) -> User:
        payload = LoginRequest(email=email, password=password)
        try:
            data = self.api.post(
                "/api/auth/login",
                json=payload.model_dump(),
                error_message="Login failed",
            )
        except AccountSuspended:
            logger.warning(f"Login refused for suspended account {email}")
            raise

        response = LoginResponse.model_validate(data)
        if response.requires_verification:
            raise VerificationRequired(
                "Please verify your email before logging in",
                email=response.email,
            )

        self._login_success(response.token, response.user)
        logger.info("Login successful!")
        return response.user

    def login_with_token(self, token: str, user: User) -> None:
        self._login_success(token, user)

    def register(self, name: str, email: str, password: str) -> RegisterResponse:
        payload = RegisterRequest(name=name, email=email, password=password)
        data = self.api.post(
            "/api/auth/register",
            json=payload.model_dump(),
            error_message="Registration failed",
        )

        response = RegisterResponse.model_validate(data)
        if response.requires_verification:
            logger.info("Registration successful! Please check your email for verification.")
            return response

        self._login_success(response.token, response.user)
        logger.info("Registration successful!")
        return response

    def logout(self) -> None:
        self._end_session()
        logger.info("Logged out successfully")

    def update_profile(self, profile_data: Dict[str, Any]) -> User:
        if not self.is_authenticated:
            raise AuthenticationRequired("Please login to update your profile")

        data = self.api.put(
            "/api/auth/profile",
            json=profile_data,
            error_message="Profile update failed",
        )
        self.user = User.model_validate(data["user"])
        logger.info("Profile updated successfully!")
        return self.user

    def update_user(self, user: User) -> None:
        self.user = user
