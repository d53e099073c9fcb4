from __future__ import annotations

"""Resolution of tree nodes to the location of their documentation content.

The resolver is a pure lookup over a loaded :class:`DocSet`: it never touches
the filesystem and never re-parses the index.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from devdoc.config import DEFAULT_INDEX_SETTINGS
from devdoc.core.models import DocTreeNode

logger = logging.getLogger(__name__)

__all__ = ["LocationResolver"]


class LocationResolver:
    """Combine the book ``base`` with a node ``link`` into a URI.

    Locations have the form ``file://<base>/<link>``. A book without a
    ``base`` attribute gets an empty base, or the directory of its index file
    when ``use_index_dir_as_default_base`` is enabled.

    Nodes without a source element (keyword type groups and the "More" node)
    and nodes of a released documentation set cannot be resolved.
    """

    def __init__(self, settings: Optional[Mapping[str, Any]] = None) -> None:
        self.settings: Dict[str, Any] = {**DEFAULT_INDEX_SETTINGS, **(settings or {})}

    def resolve(self, node: DocTreeNode) -> Tuple[str, bool]:
        """Return ``(location, True)`` for ``node`` or ``("", False)``."""
        doc_set = node.doc_set
        if not doc_set.owns(node):
            logger.debug("Cannot resolve '%s': node is not part of a live documentation set", node.title)
            return "", False

        element = doc_set.element_of(node)
        root_element = doc_set.element_of(node.root)
        if element is None or root_element is None:
            logger.debug("Cannot resolve '%s': node has no source element", node.title)
            return "", False

        base = root_element.get("base")
        if base is None:
            base = str(doc_set.index_path.parent) if self.settings["use_index_dir_as_default_base"] else ""
        link = element.get("link", "")

        return f"{self.settings['uri_scheme']}{base}/{link}", True
