from __future__ import annotations

"""Devhelp2 index importer.

Locates the ``<dir>/<basename(dir)>.devhelp2`` index of a documentation set,
parses it with lxml and builds a :class:`DocSet` holding the navigation tree.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from lxml import etree as ET

from devdoc.config import DEFAULT_INDEX_SETTINGS
from devdoc.core.models import DocSet, DocTreeNode

__all__ = ["DevhelpIndexImporter", "DevhelpImportError"]


class DevhelpImportError(Exception):
    """Exception raised when a devhelp index cannot be imported."""

    def __init__(self, message: str, file_path: Optional[Path] = None, cause: Optional[Exception] = None):
        self.file_path = file_path
        self.cause = cause
        super().__init__(message)


def _local_name(element: Any) -> Optional[str]:
    """Return the namespace-free tag name, or None for comments and PIs."""
    if not isinstance(element.tag, str):
        return None
    return ET.QName(element).localname


def _first_child(element: ET._Element, name: str) -> Optional[ET._Element]:
    for child in element:
        if _local_name(child) == name:
            return child
    return None


class DevhelpIndexImporter:
    """Importer for devhelp2 documentation sets.

    A documentation set is a directory ``D`` holding an index file named
    ``<basename(D)>.devhelp2``. The index is a ``<book>`` element with an
    optional ``<chapters>`` tree of nested ``<sub>`` elements and an optional
    flat ``<functions>`` list of ``<keyword>`` elements.

    Chapters map one to one onto tree nodes. Keywords are bucketed by their
    ``type`` attribute under a synthetic "More" node.
    """

    def __init__(self, settings: Optional[Mapping[str, Any]] = None):
        self.settings: Dict[str, Any] = {**DEFAULT_INDEX_SETTINGS, **(settings or {})}
        self.logger = logging.getLogger(f"{__name__}.DevhelpIndexImporter")

    def index_path_for(self, directory: Union[str, Path]) -> Path:
        directory = Path(directory)
        return directory / f"{directory.name}{self.settings['index_suffix']}"

    def can_import(self, directory: Union[str, Path]) -> bool:
        """Check if ``directory`` looks like a devhelp documentation set.

        Args:
            directory: Directory to check

        Returns:
            True if the directory holds a regular index file, False otherwise
        """
        directory = Path(directory)
        try:
            return directory.is_dir() and self.index_path_for(directory).is_file()
        except OSError as e:
            # is_dir/is_file only ignore ENOENT, ENOTDIR, EBADF and ELOOP
            self.logger.debug("Cannot inspect %s: %s", directory, e)
            return False

    def import_index(self, directory: Union[str, Path]) -> DocSet:
        """Parse the index of ``directory`` into a DocSet.

        Args:
            directory: Documentation set directory

        Returns:
            DocSet owning the parsed document and the navigation tree

        Raises:
            DevhelpImportError: If the directory is not a documentation set or
                the index cannot be parsed
        """
        directory = Path(directory)
        if not self.can_import(directory):
            raise DevhelpImportError(f"Not a devhelp documentation set: {directory}", directory)

        index_path = self.index_path_for(directory)
        self.logger.debug("Importing devhelp index: %s", index_path)

        try:
            document = self._parse_xml_file(index_path)
            doc_set = self._build_doc_set(index_path, document)
        except DevhelpImportError:
            raise
        except Exception as e:
            raise DevhelpImportError(f"Failed to import devhelp index: {e}", index_path, e)

        self.logger.debug("Imported %s with %d nodes (%d mapped)",
                          index_path.name, len(doc_set.nodes), len(doc_set.elements))
        return doc_set

    def _parse_xml_file(self, xml_path: Path) -> ET._ElementTree:
        try:
            parser = ET.XMLParser(resolve_entities=False, no_network=True)
            return ET.parse(str(xml_path), parser)
        except ET.XMLSyntaxError as e:
            raise DevhelpImportError(f"XML syntax error in {xml_path}: {e}", xml_path, e)
        except OSError as e:
            raise DevhelpImportError(f"Failed to read {xml_path}: {e}", xml_path, e)

    def _build_doc_set(self, index_path: Path, document: ET._ElementTree) -> DocSet:
        book = document.getroot()
        if book is None or _local_name(book) != "book":
            raise DevhelpImportError(f"Root element is not <book> in {index_path}", index_path)

        doc_set = DocSet(index_path=index_path, document=document)
        root = doc_set.add_node(book.get("title", ""), element=book)

        chapters = _first_child(book, "chapters")
        if chapters is not None:
            for child in chapters:
                self._build_chapters_tree(doc_set, root, child)

        functions = _first_child(book, "functions")
        if functions is not None:
            self._build_keywords_tree(doc_set, root, functions)

        return doc_set

    def _build_chapters_tree(self, doc_set: DocSet, parent: DocTreeNode, source: Any) -> None:
        # Only <sub> elements carry structure; anything else is pruned
        if _local_name(source) != "sub":
            return

        node = doc_set.add_node(source.get("name", ""), parent=parent, element=source)
        for child in source:
            self._build_chapters_tree(doc_set, node, child)
        doc_set.attach(node)

    def _build_keywords_tree(self, doc_set: DocSet, root: DocTreeNode, functions: ET._Element) -> None:
        """Group the keywords of ``functions`` by type under a "More" node.

        The "More" node is only linked into the tree when at least one keyword
        was found.
        """
        more = doc_set.add_node(self.settings["more_label"], parent=root)
        groups: Dict[str, DocTreeNode] = {}

        for element in functions:
            if _local_name(element) != "keyword":
                continue

            keyword_type = element.get("type", "")
            group = groups.get(keyword_type)
            if group is None:
                group = doc_set.attach(doc_set.add_node(keyword_type, parent=more))
                groups[keyword_type] = group

            doc_set.attach(doc_set.add_node(element.get("name", ""), parent=group, element=element))

        if more.child_handles:
            doc_set.attach(more)
        else:
            doc_set.discard(more)
            self.logger.debug("No keywords in %s, dropping '%s' node", doc_set.index_path.name, more.title)
