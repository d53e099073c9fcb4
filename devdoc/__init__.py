"""Devhelp documentation index extension.

Front-ends (documentation viewers, scripts) should only depend on the public
API exposed here rather than importing internal modules directly.
"""

from .core.extension import DevdocExtension
from .core.models import DocSet, DocTreeNode
from .core.plugins import ApplicabilityLevel

__version__ = "0.1.0"

__all__: list[str] = [
    "ApplicabilityLevel",
    "DevdocExtension",
    "DocSet",
    "DocTreeNode",
]
