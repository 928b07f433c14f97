"""Domain models for user quota records."""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class QuotaPolicy(Enum):
    """How the daily quota applies to a user."""

    ENFORCED = "enforced"
    EXEMPT = "exempt"


@dataclass(frozen=True)
class UserQuotaRecord:
    """Represents a user's quota record in the record store."""

    id: str
    daily_quota: int
    usage_count: int
    last_usage_date: date | None = None

    @property
    def remaining(self) -> int:
        """Return how many generations are left today."""
        return max(self.daily_quota - self.usage_count, 0)

    def policy(self, admin_user_id: str) -> QuotaPolicy:
        """Resolve the quota policy for this record."""
        if self.id == admin_user_id:
            return QuotaPolicy.EXEMPT
        return QuotaPolicy.ENFORCED
