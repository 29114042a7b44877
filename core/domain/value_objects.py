"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlparse

DISCORD_WEBHOOK_MARKER = "discord.com/api/webhooks"


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """


@dataclass(frozen=True)
class Email(ValueObject):
    """Email value object, normalized to lower case."""

    value: str

    def __post_init__(self):
        """Normalize and validate email format."""
        normalized = (self.value or "").strip().lower()
        if not normalized or "@" not in normalized:
            raise ValueError(f"Invalid email address: {self.value}")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        """Return email as string."""
        return self.value


@dataclass(frozen=True)
class DiscordWebhookUrl(ValueObject):
    """Discord webhook URL value object."""

    value: str

    def __post_init__(self):
        """Validate webhook URL format."""
        parsed = urlparse(self.value or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("Invalid webhook URL format.")
        if DISCORD_WEBHOOK_MARKER not in self.value:
            raise ValueError("URL must be a Discord webhook URL.")

    def __str__(self) -> str:
        return self.value


class PlanType(Enum):
    """License plan tier."""

    THIRTY_DAYS = "30d"
    NINETY_DAYS = "90d"

    @classmethod
    def parse(cls, value: str) -> "PlanType":
        """Map a stored plan string to a tier; unknown values grant 30 days."""
        if value == cls.NINETY_DAYS.value:
            return cls.NINETY_DAYS
        return cls.THIRTY_DAYS

    @property
    def days(self) -> int:
        """Grant length in days."""
        return 90 if self is PlanType.NINETY_DAYS else 30

    def __str__(self) -> str:
        """Return plan as string."""
        return self.value


class TaskStatus(Enum):
    """Scan task status."""

    RUNNING = "Running"
    PAUSED = "Paused"

    def __str__(self) -> str:
        return self.value
