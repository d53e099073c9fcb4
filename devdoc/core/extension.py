from __future__ import annotations

"""Devhelp documentation index extension.

:class:`DevdocExtension` is the component a host viewer instantiates and
owns. It builds navigation trees for devhelp2 documentation sets and resolves
their nodes to content locations. Every documentation set it builds stays
loaded until :meth:`DevdocExtension.close` is called.
"""

import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple, Union

from devdoc.config import ConfigManager
from devdoc.core.importers import DevhelpImportError, DevhelpIndexImporter
from devdoc.core.models import DocSet, DocTreeNode
from devdoc.core.plugins.interfaces import ApplicabilityLevel, DocIndexProviderBase
from devdoc.core.services import LocationResolver

logger = logging.getLogger(__name__)

__all__ = ["DevdocExtension"]


class DevdocExtension(DocIndexProviderBase):
    """Index provider for devhelp2 books.

    Parameters
    ----------
    settings : mapping, optional
        Index settings (see ``devhelp.yml``). Read from
        :class:`~devdoc.config.ConfigManager` when omitted.

    Notes
    -----
    Not thread-safe: a host must serialize calls into one instance or give
    each thread its own.
    """

    def __init__(self, settings: Optional[Mapping[str, Any]] = None) -> None:
        if settings is None:
            settings = ConfigManager().get_index_settings()
        self._importer = DevhelpIndexImporter(settings)
        self._resolver = LocationResolver(settings)
        self._doc_sets: List[DocSet] = []
        self._roots: List[DocTreeNode] = []

    def __enter__(self) -> "DevdocExtension":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def roots(self) -> List[DocTreeNode]:
        """Roots of every tree built so far, in build order."""
        return list(self._roots)

    @property
    def doc_sets(self) -> List[DocSet]:
        return list(self._doc_sets)

    # ---------------------------------------------------------------------
    # PUBLIC API
    # ---------------------------------------------------------------------
    def applicability_level(self) -> ApplicabilityLevel:
        return ApplicabilityLevel.SMALL

    def can_handle(self, path: Union[str, Path]) -> bool:
        return self._importer.can_import(path)

    def build(self, path: Union[str, Path]) -> Optional[DocTreeNode]:
        if not self._importer.can_import(path):
            logger.debug("Not a devhelp documentation set: %s", path)
            return None

        try:
            doc_set = self._importer.import_index(path)
        except DevhelpImportError as e:
            logger.debug("Skipping %s: %s", path, e)
            return None

        self._doc_sets.append(doc_set)
        self._roots.append(doc_set.root)
        logger.info("Loaded documentation set '%s' (%d nodes)", doc_set.root.title, len(doc_set.nodes))
        return doc_set.root

    def resolve(self, node: DocTreeNode) -> Tuple[str, bool]:
        if not any(doc_set is node.doc_set for doc_set in self._doc_sets):
            logger.debug("Cannot resolve '%s': node was not built by this extension", node.title)
            return "", False
        return self._resolver.resolve(node)

    def close(self) -> int:
        """Release every loaded documentation set.

        Returns:
            Number of tree nodes released
        """
        released = sum(doc_set.release() for doc_set in self._doc_sets)
        if self._doc_sets:
            logger.debug("Released %d documentation sets (%d nodes)", len(self._doc_sets), released)
        self._doc_sets.clear()
        self._roots.clear()
        return released
