"""Core protocols for dependency injection.

Domain-specific protocols (repositories, enforcer, query service) live in
their respective domains/ directories. This module keeps cross-cutting
infrastructure protocols only.
"""

from quotaguard.core.health.protocols import HealthProbe, HealthServiceProtocol
from quotaguard.core.protocols.identity import IdentityProvider, Principal

__all__ = [
    "HealthProbe",
    "HealthServiceProtocol",
    "IdentityProvider",
    "Principal",
]
