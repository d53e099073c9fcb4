from __future__ import annotations

"""Host-facing provider contract.

Hosts rank providers by :class:`ApplicabilityLevel` and drive them through
the :class:`DocIndexProvider` protocol.
"""

from .interfaces import ApplicabilityLevel, DocIndexProvider, DocIndexProviderBase

__all__ = [
    "ApplicabilityLevel",
    "DocIndexProvider",
    "DocIndexProviderBase",
]
