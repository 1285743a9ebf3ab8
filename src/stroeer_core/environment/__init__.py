# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Browsing context access and environment signals."""

from .context import AccessDenied, BrowsingContext, ContextRuntime, Element, Location, Rect
from .probe import EnvironmentProbe
from .static import StaticBrowsingContext, StaticElement, StaticRuntime

__all__ = [
    # Interfaces
    "AccessDenied",
    "BrowsingContext",
    "ContextRuntime",
    "Element",
    "Location",
    "Rect",
    # Signals
    "EnvironmentProbe",
    # In-memory contexts
    "StaticBrowsingContext",
    "StaticElement",
    "StaticRuntime",
]
