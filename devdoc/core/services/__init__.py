from __future__ import annotations

"""Services operating on loaded documentation sets."""

from .location_resolver import LocationResolver  # noqa: F401

__all__: list[str] = [
    "LocationResolver",
]
