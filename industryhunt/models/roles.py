"""User role definitions."""

from enum import Enum


class UserRole(str, Enum):
    """Closed set of roles a dashboard user can hold."""
    STUDENT = "STUDENT"
    MENTOR = "MENTOR"
    EMPLOYER = "EMPLOYER"

    @classmethod
    def parse(cls, value: "str | UserRole | None") -> "UserRole":
        if isinstance(value, UserRole):
            return value
        normalized = (value or "").strip().upper()
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown user role: {value!r}") from None
