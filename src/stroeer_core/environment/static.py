# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""In-memory browsing contexts.

Used by the CLI and tests to describe a frame chain without a browser.
A context marked ``restricted`` behaves like a cross-origin one: reading
its location, referrer, geometry or elements raises :class:`AccessDenied`.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from .context import AccessDenied, Location, Rect


@dataclass
class StaticElement:
    """Element with a fixed bounding rectangle."""

    id: Optional[str] = None
    top: float = 0
    height: float = 1

    def bounding_client_rect(self) -> Rect:
        return Rect(top=self.top, height=self.height)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StaticElement":
        return cls(
            id=data.get("id"),
            top=data.get("top", 0),
            height=data.get("height", 1),
        )


@dataclass(eq=False)
class StaticBrowsingContext:
    """Browsing context backed by plain values."""

    href: str
    parent_context: Optional["StaticBrowsingContext"] = None
    frame: Optional[StaticElement] = None
    referrer: Optional[str] = None
    height: float = 0
    elements: list[StaticElement] = field(default_factory=list)
    restricted: bool = False

    def _check_access(self) -> None:
        if self.restricted:
            raise AccessDenied(f"blocked access to cross-origin context {self.href!r}")

    def parent(self) -> Optional["StaticBrowsingContext"]:
        return self.parent_context

    def frame_element(self) -> Optional[StaticElement]:
        # Browsers hide the embedding element from cross-origin children
        if self.parent_context is not None and self.parent_context.restricted:
            return None
        return self.frame

    def location(self) -> Location:
        self._check_access()
        protocol = "https:" if self.href.startswith("https") else "http:"
        return Location(protocol=protocol, href=self.href)

    def document_referrer(self) -> Optional[str]:
        self._check_access()
        return self.referrer

    def element_by_id(self, element_id: str) -> Optional[StaticElement]:
        self._check_access()
        for element in self.elements:
            if element.id == element_id:
                return element
        return None

    def inner_height(self) -> float:
        self._check_access()
        return self.height


class StaticRuntime:
    """Runtime over a chain of static contexts."""

    def __init__(
        self,
        self_ctx: StaticBrowsingContext,
        top_ctx: Optional[StaticBrowsingContext] = None,
    ):
        self._self = self_ctx
        self._top = top_ctx or self_ctx

    def self_context(self) -> StaticBrowsingContext:
        return self._self

    def top_context(self) -> StaticBrowsingContext:
        return self._top

    @classmethod
    def single(cls, href: str = "https://localhost/", height: float = 800) -> "StaticRuntime":
        """Runtime with one top-level context and no elements."""
        return cls(StaticBrowsingContext(href=href, height=height))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StaticRuntime":
        """Build a frame chain from a description.

        ``data["frames"]`` lists contexts from the top-level one down to the
        context the adapter runs in. Each frame accepts ``href``,
        ``referrer``, ``innerHeight``, ``restricted``, ``elements`` (list of
        ``{id, top, height}``) and ``frameElement`` (``{top, height}``).
        """
        frames = data.get("frames") or []
        if not frames:
            raise ValueError("environment description needs at least one frame")

        parent: Optional[StaticBrowsingContext] = None
        chain: list[StaticBrowsingContext] = []
        for frame in frames:
            frame_element = frame.get("frameElement")
            context = StaticBrowsingContext(
                href=frame.get("href", "https://localhost/"),
                parent_context=parent,
                frame=StaticElement.from_dict(frame_element) if frame_element else None,
                referrer=frame.get("referrer"),
                height=frame.get("innerHeight", 0),
                elements=[StaticElement.from_dict(e) for e in frame.get("elements", [])],
                restricted=frame.get("restricted", False),
            )
            chain.append(context)
            parent = context

        return cls(self_ctx=chain[-1], top_ctx=chain[0])
