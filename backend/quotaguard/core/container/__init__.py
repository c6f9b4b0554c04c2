"""Dependency Injection Container Module.

Usage:
------
    # Initialize at startup (main.py lifespan)
    from quotaguard.core.container import initialize_container
    initialize_container(settings)

    # In tests, construct directly with fakes instead of using the global
    from quotaguard.core.container import Container

Module structure:
-----------------
    container/
    ├── __init__.py      # This file - exports public API
    ├── container.py     # Container dataclass (serves)
    └── factory.py       # create_container() (builds)
"""

from typing import TYPE_CHECKING

from quotaguard.core.container.container import Container
from quotaguard.core.container.factory import create_container

if TYPE_CHECKING:
    from quotaguard.core.config import Settings

__all__ = ["Container", "create_container", "container", "initialize_container"]


container: Container | None = None
"""Global container instance, set by ``initialize_container()``.

Domain code never imports this; domains receive dependencies through their
constructors.
"""


def initialize_container(settings: "Settings") -> None:
    """Initialize the global container. Call once at startup.

    Raises:
        RuntimeError: If the container is already initialized
    """
    global container

    if container is not None:
        raise RuntimeError(
            "Container already initialized. "
            "initialize_container() should only be called once at startup."
        )

    container = create_container(settings)


def reset_container() -> None:
    """Reset the global container to None. For testing only."""
    global container
    container = None
