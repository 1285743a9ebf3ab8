# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Context signals read from the current and ancestor browsing contexts.

Cross-origin access may fail at any point of a frame chain. Every public
method catches such failures where they happen and degrades to a fallback
value instead of raising.
"""

import logging
from typing import Optional

from ..config.settings import settings
from .context import AccessDenied, BrowsingContext, ContextRuntime

logger = logging.getLogger(__name__)

# Failures of a context read: cross-origin refusal or a runtime that lacks
# the property altogether.
_ACCESS_ERRORS = (AccessDenied, AttributeError, TypeError, LookupError)


class EnvironmentProbe:
    """Reads referrer, security, accessibility and visibility signals."""

    def __init__(self, runtime: ContextRuntime, max_depth: Optional[int] = None):
        """Initialize the probe.

        Args:
            runtime: Access to the current and top-level contexts
            max_depth: Maximum number of frames walked up a chain
        """
        self._runtime = runtime
        self._max_depth = max_depth if max_depth is not None else settings.max_frame_depth

    def is_secure(self) -> bool:
        """Whether the current context was loaded over https."""
        try:
            return self._runtime.self_context().location().protocol == "https:"
        except _ACCESS_ERRORS as e:
            logger.debug(f"Could not read own location: {e}")
            return False

    def top_referrer(self) -> Optional[str]:
        """Referrer of the top-level document, else of the current one."""
        try:
            return self._runtime.top_context().document_referrer()
        except _ACCESS_ERRORS as e:
            logger.debug(f"Top referrer not readable, using own referrer: {e}")

        try:
            return self._runtime.self_context().document_referrer()
        except _ACCESS_ERRORS as e:
            logger.debug(f"Own referrer not readable: {e}")
            return None

    def most_accessible_top_context(self) -> BrowsingContext:
        """Highest ancestor reachable without crossing an origin boundary."""
        current = self._runtime.self_context()
        visited = {id(current)}

        try:
            top = self._runtime.top_context()
            for _ in range(self._max_depth):
                if current is top:
                    break
                parent = current.parent()
                if parent is None or id(parent) in visited:
                    break
                if not len(parent.location().href):
                    break
                visited.add(id(parent))
                current = parent
        except _ACCESS_ERRORS as e:
            logger.debug(f"Stopped walking up the frame chain: {e}")

        return current

    def is_main_page_accessible(self) -> bool:
        """Whether the top-level context is reachable from the current one."""
        try:
            return self.most_accessible_top_context() is self._runtime.top_context()
        except _ACCESS_ERRORS as e:
            logger.debug(f"Top context not available: {e}")
            return False

    def is_element_in_view(self, element_id: Optional[str]) -> Optional[bool]:
        """Whether an element is vertically within the viewport of every frame.

        The element must overlap its own context's viewport, and each frame
        element embedding that context must overlap its parent's viewport,
        up to the top-level context.

        Returns:
            True or False, or None when visibility cannot be determined
            (missing element, cross-origin frame, unusual runtime).
        """
        try:
            context = self._runtime.self_context()
            element = context.element_by_id(element_id)
            visited: set[int] = set()

            for _ in range(self._max_depth):
                if element is None:
                    return None

                rect = element.bounding_client_rect()
                in_view = rect.top + rect.height >= 0 and rect.top <= context.inner_height()
                if not in_view:
                    return False

                parent = context.parent()
                if parent is None:
                    return True
                if id(context) in visited:
                    return None
                visited.add(id(context))

                element = context.frame_element()
                context = parent
        except _ACCESS_ERRORS as e:
            logger.debug(f"Visibility of {element_id!r} unknown: {e}")
            return None

        logger.debug(f"Frame chain deeper than {self._max_depth}, visibility unknown")
        return None
