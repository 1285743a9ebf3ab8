# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Interpretation of vendor responses into normalized bids."""

import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional

from pydantic import ValidationError

from ..config.settings import settings
from ..models.payload import ServerRequest
from ..models.response import NormalizedBid, ResponseBid, ServerResponseBody

logger = logging.getLogger(__name__)


class ResponseError(Exception):
    """Response body could not be interpreted."""

    pass


class UnsupportedResponseError(ResponseError):
    """Response uses the legacy redirect-only shape without a bids list."""

    pass


def response_body(server_response: Any) -> Any:
    """Body of a host response given as a mapping or an object."""
    if isinstance(server_response, Mapping):
        return server_response.get("body")
    return getattr(server_response, "body", None)


class ResponseInterpreter:
    """Turns a vendor response body into normalized bids."""

    def __init__(
        self,
        tracker: Optional[Callable[[str], Any]] = None,
        ttl: Optional[int] = None,
        currency: Optional[str] = None,
        net_revenue: Optional[bool] = None,
    ):
        """Initialize the interpreter.

        Args:
            tracker: Fires a GET to the tracking endpoint, result ignored
            ttl: Seconds a normalized bid stays valid
            currency: Currency of all bids
            net_revenue: Whether cpm values are net
        """
        self._tracker = tracker
        self._ttl = ttl if ttl is not None else settings.bid_ttl
        self._currency = currency or settings.bid_currency
        self._net_revenue = net_revenue if net_revenue is not None else settings.net_revenue

    def interpret(self, body: Any, request: Optional[ServerRequest] = None) -> list[NormalizedBid]:
        """Interpret a response body.

        Args:
            body: Parsed JSON body of the vendor response
            request: The request this body answers; when given, bids for
                unknown bid ids are dropped

        Returns:
            Normalized bids, empty for a missing, empty or non-object body

        Raises:
            UnsupportedResponseError: Body has no bids list (legacy redirect)
            ResponseError: Bids list is malformed
        """
        if not body or not isinstance(body, Mapping):
            return []

        if "bids" not in body:
            raise UnsupportedResponseError(
                f"Response without bids is not supported (keys: {sorted(body)})"
            )

        try:
            parsed = ServerResponseBody.model_validate(dict(body))
        except ValidationError as e:
            raise ResponseError(f"Malformed response body: {e}") from e

        if parsed.tep:
            self._track(parsed.tep)

        bids = parsed.bids
        if request is not None:
            bids = self._known_bids(bids, request)

        return [self._normalize(bid) for bid in bids]

    def _track(self, url: str) -> None:
        if self._tracker is None:
            logger.debug(f"No tracker configured, skipping {url}")
            return
        try:
            self._tracker(url)
        except Exception as e:
            logger.warning(f"Tracking call to {url} could not be dispatched: {e}")

    def _known_bids(self, bids: list[ResponseBid], request: ServerRequest) -> list[ResponseBid]:
        known = {entry.bid for entry in request.data.bids}
        kept = [bid for bid in bids if bid.bid_id in known]
        if len(kept) < len(bids):
            dropped = [bid.bid_id for bid in bids if bid.bid_id not in known]
            logger.warning(f"Dropping response bids for unknown bid ids: {dropped}")
        return kept

    def _normalize(self, bid: ResponseBid) -> NormalizedBid:
        return NormalizedBid(
            request_id=bid.bid_id,
            cpm=bid.cpm or 0,
            width=bid.width or 0,
            height=bid.height or 0,
            ad=bid.ad,
            ttl=self._ttl,
            currency=self._currency,
            net_revenue=self._net_revenue,
            creative_id="",
            extra=dict(bid.bid_price_optimisation or {}),
        )
