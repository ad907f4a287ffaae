"""
Desk error kinds.

Every failure of a desk operation is raised as one of these.  Each carries
a stable ``kind`` plus the parameters a presentation layer needs to word
its message (remaining seconds, remaining attempts, field name, level).
"""

from __future__ import annotations

from typing import Any


class DeskError(Exception):
    kind = "DeskError"
    status_code = 400

    def __init__(self, message: str, **params: Any) -> None:
        super().__init__(message)
        self.message = message
        self.params = params

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "detail": self.message, "params": self.params}


# ── Login flow ──────────────────────────────────────────────────────
class LockedOut(DeskError):
    kind = "LockedOut"
    status_code = 429

    def __init__(self, remaining_seconds: int) -> None:
        super().__init__(
            f"Login is locked, try again in {remaining_seconds} seconds",
            remaining_seconds=remaining_seconds,
        )
        self.remaining_seconds = remaining_seconds


class InvalidCredential(DeskError):
    kind = "InvalidCredential"
    status_code = 401

    def __init__(self, attempts_remaining: int) -> None:
        super().__init__(
            f"Wrong password, attempts remaining: {attempts_remaining}",
            attempts_remaining=attempts_remaining,
        )
        self.attempts_remaining = attempts_remaining


class TooManyAttempts(DeskError):
    kind = "TooManyAttempts"
    status_code = 429

    def __init__(self, remaining_seconds: int) -> None:
        super().__init__(
            f"Too many attempts, login locked for {remaining_seconds} seconds",
            remaining_seconds=remaining_seconds,
        )
        self.remaining_seconds = remaining_seconds


class AccountNotFound(DeskError):
    kind = "AccountNotFound"
    status_code = 401

    def __init__(self) -> None:
        super().__init__("No client account is registered for this phone")


class AccountBlocked(DeskError):
    kind = "AccountBlocked"
    status_code = 403

    def __init__(self) -> None:
        super().__init__("This account is blocked")


class InvalidState(DeskError):
    kind = "InvalidState"
    status_code = 409


# ── Validation ──────────────────────────────────────────────────────
class MissingField(DeskError):
    kind = "MissingField"
    status_code = 422

    def __init__(self, field: str) -> None:
        super().__init__(f"Field '{field}' is required", field=field)
        self.field = field


class InvalidField(DeskError):
    kind = "InvalidField"
    status_code = 422

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"Field '{field}' is invalid: {reason}", field=field)
        self.field = field


class DuplicatePhone(DeskError):
    kind = "DuplicatePhone"
    status_code = 409

    def __init__(self, phone: str) -> None:
        super().__init__("Phone number already registered", phone=phone)


class DuplicateId(DeskError):
    kind = "DuplicateId"
    status_code = 409

    def __init__(self, item_id: str) -> None:
        super().__init__("Generated item id already exists", id=item_id)


# ── Lookup / authorization ──────────────────────────────────────────
class NotFound(DeskError):
    kind = "NotFound"
    status_code = 404

    def __init__(self, key: str) -> None:
        super().__init__(f"'{key}' not found", key=key)
        self.key = key


class Forbidden(DeskError):
    kind = "Forbidden"
    status_code = 403

    def __init__(self, required_level: int, required_role: str) -> None:
        super().__init__(
            f"Role '{required_role}' or higher required",
            required_level=required_level,
            required_role=required_role,
        )
        self.required_level = required_level
