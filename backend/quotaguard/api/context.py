"""HTTP API request context.

Only the API layer creates these, via deps.get_context().
"""

from dataclasses import dataclass
from typing import Optional

from quotaguard.core.context import BaseContext


@dataclass
class ApiContext(BaseContext):
    """Request context: the authenticated account plus request metadata."""

    request_id: str = ""
    email: Optional[str] = None
    auth_method: str = "bearer"

    def __str__(self) -> str:
        """Format context for log lines."""
        return f"ApiContext(request_id={self.request_id}, account_id={self.account_id})"
