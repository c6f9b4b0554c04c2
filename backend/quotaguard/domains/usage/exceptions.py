"""Usage domain exceptions."""

from typing import Optional

from quotaguard.core.exceptions import QuotaGuardException


class QuotaExceededError(QuotaGuardException):
    """Raised when admission is denied because the period allowance is used up."""

    kind = "quota_exceeded"

    def __init__(
        self,
        operation: str,
        limit: int,
        current_usage: int,
        message: Optional[str] = None,
    ) -> None:
        """Initialize with operation, limit, and current usage."""
        self.operation = operation
        self.limit = limit
        self.current_usage = current_usage
        super().__init__(message or "Monthly limit reached")

    def to_payload(self) -> dict:
        """Include machine-readable limit and usage for upgrade prompts."""
        payload = super().to_payload()
        payload["limit"] = self.limit
        payload["currentUsage"] = self.current_usage
        return payload


class NoActiveSubscriptionError(QuotaGuardException):
    """Raised when an operation requires a subscription and the account has none."""

    kind = "no_active_subscription"

    def __init__(self, operation: str, message: Optional[str] = None) -> None:
        """Initialize with the refused operation."""
        self.operation = operation
        super().__init__(message or "No active subscription found")
