from __future__ import annotations

"""Importers turning on-disk documentation indexes into DocSets.

Key components:
- DevhelpIndexImporter: locates and parses ``<dir>/<basename(dir)>.devhelp2``
"""

from .devhelp_importer import DevhelpIndexImporter, DevhelpImportError

__all__ = ["DevhelpIndexImporter", "DevhelpImportError"]
