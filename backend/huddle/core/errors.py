"""Error Hierarchy — typed, categorized exceptions for all Huddle failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - Authentication failures never say whether the username exists

Design Decisions:
    - Single hierarchy with HuddleError base: FastAPI global handler catches all
    - Not-found (404), forbidden (403) and conflict (409) kept distinct so callers
      can tell a missing message from someone else's message
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    channel_id: int | None = None
    message_id: int | None = None
    debug_info: dict[str, Any] | None = None


class HuddleError(Exception):
    """Base exception for all Huddle errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "channel_id": self.context.channel_id,
                    "message_id": self.context.message_id,
                },
            }
        }


# ─── Authentication (401) ───────────────────────────────────────

class InvalidCredentialsError(HuddleError):
    """Username/password pair rejected. Same shape for unknown user and bad password."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid username or password",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class AuthenticationRequiredError(HuddleError):
    """Request carried no bearer token."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Authentication required",
            "AUTHENTICATION_REQUIRED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class InvalidTokenError(HuddleError):
    """Token malformed, badly signed, or naming an unknown user."""
    def __init__(
        self,
        message: str = "Invalid authentication token",
        code: str = "INVALID_TOKEN",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class TokenExpiredError(InvalidTokenError):
    """Token signature is valid but its expiry has elapsed."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Authentication token has expired", "TOKEN_EXPIRED", context,
        )


# ─── Conflicts (409) ────────────────────────────────────────────

class UsernameTakenError(HuddleError):
    """Registration with a username that already exists."""
    def __init__(self, username: str, context: ErrorContext | None = None):
        super().__init__(
            "Username already exists",
            "USERNAME_TAKEN", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.username = username


class EmailTakenError(HuddleError):
    """Registration with an email that already exists."""
    def __init__(self, email: str, context: ErrorContext | None = None):
        super().__init__(
            "Email already exists",
            "EMAIL_TAKEN", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.email = email


class ChannelNameTakenError(HuddleError):
    """Channel creation with a name that already exists (exact match)."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Channel name '{name}' already exists",
            "CHANNEL_NAME_TAKEN", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.name = name


# ─── Not found (404) ────────────────────────────────────────────

class ResourceNotFoundError(HuddleError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str,
        code: str = "RESOURCE_NOT_FOUND", context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            code, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class ChannelNotFoundError(ResourceNotFoundError):
    def __init__(self, channel_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.channel_id = channel_id
        super().__init__("Channel", str(channel_id), "CHANNEL_NOT_FOUND", ctx)


class MessageNotFoundError(ResourceNotFoundError):
    def __init__(self, message_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.message_id = message_id
        super().__init__("Message", str(message_id), "MESSAGE_NOT_FOUND", ctx)


class UserNotFoundError(ResourceNotFoundError):
    def __init__(self, user_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        super().__init__("User", str(user_id), "USER_NOT_FOUND", ctx)


# ─── Authorization (403) ────────────────────────────────────────

class NotAMemberError(HuddleError):
    """Posting to a channel the actor is not a member of."""
    def __init__(self, channel_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.channel_id = channel_id
        super().__init__(
            "You are not a member of this channel",
            "NOT_A_MEMBER", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, ctx, 403,
        )


class NotOwnerError(HuddleError):
    """Editing or deleting a message someone else sent."""
    def __init__(self, message_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.message_id = message_id
        super().__init__(
            "You can only modify your own messages",
            "NOT_OWNER", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, ctx, 403,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(HuddleError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class TokenSigningError(HuddleError):
    """Token could not be signed — the signing key or algorithm is misconfigured."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Token signing failed: {message}",
            "TOKEN_SIGNING_FAILED", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
