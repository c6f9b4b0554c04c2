"""Base context for all operations.

Carries the account the operation runs for and a contextual logger bound to
it. ApiContext extends it with request metadata.
"""

from dataclasses import dataclass, field

from quotaguard.core.logging import ContextualLogger


@dataclass
class BaseContext:
    """Base context for all operations.

    ``account_id`` is the only positional field. ``logger`` is keyword-only;
    when omitted it is derived from the account in __post_init__.
    """

    account_id: str

    logger: ContextualLogger = field(default=None, kw_only=True, repr=False)

    def __post_init__(self):
        """Auto-derive logger from the account if not provided."""
        if self.logger is None:
            from quotaguard.core.logging import logger as base_logger

            self.logger = base_logger.with_context(account_id=self.account_id)
