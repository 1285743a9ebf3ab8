# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Browsing context interfaces read by the environment probe.

Any operation on a context or element may raise :class:`AccessDenied` when
the context belongs to another origin.
"""

from dataclasses import dataclass
from typing import Optional, Protocol


class AccessDenied(Exception):
    """Reading a cross-origin browsing context was refused."""

    pass


@dataclass(frozen=True)
class Location:
    """Location of a browsing context."""

    protocol: str
    href: str


@dataclass(frozen=True)
class Rect:
    """Vertical geometry of an element relative to its context's viewport."""

    top: float
    height: float


class Element(Protocol):
    """Element resolved inside a browsing context."""

    def bounding_client_rect(self) -> Rect: ...


class BrowsingContext(Protocol):
    """A (possibly embedded) browsing context."""

    def parent(self) -> Optional["BrowsingContext"]:
        """Embedding context, or None for the top-level context."""
        ...

    def frame_element(self) -> Optional[Element]:
        """Frame element embedding this context in its parent."""
        ...

    def location(self) -> Location: ...

    def document_referrer(self) -> Optional[str]: ...

    def element_by_id(self, element_id: str) -> Optional[Element]: ...

    def inner_height(self) -> float: ...


class ContextRuntime(Protocol):
    """Entry points into the context chain the adapter runs in."""

    def self_context(self) -> BrowsingContext: ...

    def top_context(self) -> BrowsingContext: ...
