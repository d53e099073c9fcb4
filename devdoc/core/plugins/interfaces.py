from __future__ import annotations

"""Documentation index provider interfaces.

Defines the contract between a host documentation viewer and the components
that turn documentation directories into navigation trees.
"""

from abc import ABC, abstractmethod
from enum import IntEnum
from pathlib import Path
from typing import Optional, Protocol, Tuple, Union, runtime_checkable

from devdoc.core.models import DocTreeNode

__all__ = ["ApplicabilityLevel", "DocIndexProvider", "DocIndexProviderBase"]

PathLike = Union[str, Path]


class ApplicabilityLevel(IntEnum):
    """Coarse priority hint used by hosts to rank candidate providers.

    Higher values win when several providers accept the same directory.
    """

    NONE = 0
    SMALL = 1
    MEDIUM = 2
    LARGE = 3


@runtime_checkable
class DocIndexProvider(Protocol):
    """Protocol for documentation index providers.

    A host probes many directories speculatively, so ``build`` must answer
    ``None`` for directories it does not understand instead of raising.
    """

    def applicability_level(self) -> ApplicabilityLevel:
        """Return the priority of this provider relative to others."""
        ...

    def can_handle(self, path: PathLike) -> bool:
        """Return True if ``path`` looks like a documentation set.

        This method should be fast and must not build the tree.
        """
        ...

    def build(self, path: PathLike) -> Optional[DocTreeNode]:
        """Build the navigation tree of ``path``.

        Returns:
            Root of a complete tree, or None if the directory is not a
            documentation set or its index cannot be parsed
        """
        ...

    def resolve(self, node: DocTreeNode) -> Tuple[str, bool]:
        """Return ``(location, success)`` for a node built by this provider."""
        ...


class DocIndexProviderBase(ABC):
    """Abstract base class for DocIndexProvider implementations."""

    @abstractmethod
    def applicability_level(self) -> ApplicabilityLevel:
        pass

    @abstractmethod
    def can_handle(self, path: PathLike) -> bool:
        pass

    @abstractmethod
    def build(self, path: PathLike) -> Optional[DocTreeNode]:
        pass

    @abstractmethod
    def resolve(self, node: DocTreeNode) -> Tuple[str, bool]:
        pass

    def get_provider_info(self) -> dict:
        """Get information about this provider."""
        return {
            'class': self.__class__.__name__,
            'applicability_level': self.applicability_level().name.lower(),
        }
