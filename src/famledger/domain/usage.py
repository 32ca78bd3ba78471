"""Monthly transaction usage counter."""

from datetime import datetime, UTC
from typing import Optional

from famledger.config import UNLIMITED
from famledger.database.base import Database
from famledger.domain.entities import UsageCounter
from famledger.domain.errors import QuotaExceededError, ValidationError, quota_exceeded


def month_key(moment: datetime) -> str:
    """Return the ``YYYY-MM`` bucket of a timestamp."""
    return moment.strftime("%Y-%m")


class UsageService:
    """Service for reading and limiting a user's monthly usage."""

    def __init__(self, db: Database, user_id: str):
        """Initialize usage service.

        Args:
            db: Database instance
            user_id: Owner of the ledger
        """
        self.db = db
        self.user_id = user_id

    def get_usage(self) -> UsageCounter:
        return self.db.get_usage(self.user_id)

    def set_limit(self, limit: int) -> None:
        """Set the monthly limit; -1 removes it.

        Raises:
            ValidationError: If limit is below -1
        """
        if limit < UNLIMITED:
            raise ValidationError(f"Invalid monthly limit {limit}")
        self.db.set_monthly_limit(self.user_id, limit)

    def check_quota(self, now: Optional[datetime] = None) -> None:
        """Raise QuotaExceededError when this month's limit is used up."""
        month = month_key(now or datetime.now(UTC))
        usage = self.get_usage()
        if usage.is_limit_reached(month):
            raise QuotaExceededError(quota_exceeded(month, usage.limit))
