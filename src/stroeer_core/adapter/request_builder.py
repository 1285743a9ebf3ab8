# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Assembly of the outbound vendor request from validated bid requests."""

import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..config.settings import settings
from ..environment.probe import EnvironmentProbe
from ..models.bid_request import BidderRequest, BidParams, BidRequest, Endpoint
from ..models.payload import (
    GdprPayload,
    OutboundPayload,
    PayloadBid,
    ServerRequest,
    UserIds,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AmbientSignals:
    """Read-only client state forwarded with the request."""

    yield_test: Optional[str] = None  # persisted flag, "1" means enabled
    ab: Optional[dict[str, Any]] = None  # A/B testing key values

    @classmethod
    def from_environment(
        cls,
        storage: Optional[Mapping[str, Any]] = None,
        global_vars: Optional[Mapping[str, Any]] = None,
    ) -> "AmbientSignals":
        """Pick the known keys out of client storage and global variables."""
        storage = storage or {}
        global_vars = global_vars or {}
        ab = global_vars.get(settings.ab_global_key)
        return cls(
            yield_test=storage.get(settings.yield_test_storage_key),
            ab=dict(ab) if isinstance(ab, Mapping) else None,
        )

    @property
    def yield_test_enabled(self) -> bool:
        return self.yield_test == "1"


def build_url(endpoint: Endpoint) -> str:
    """Vendor URL for the given overrides; the scheme is always https.

    A secure port override wins over a plain port override.
    """
    host = endpoint.host or settings.default_host
    port = endpoint.secure_port or endpoint.port or settings.default_port
    path = endpoint.path or settings.default_path
    if not path.startswith("/"):
        path = f"/{path}"
    netloc = f"{host}:{port}" if port else host
    return f"https://{netloc}{path}"


def _now_ms() -> int:
    return int(time.time() * 1000)


class RequestBuilder:
    """Builds one POST request for a batch of validated bid requests."""

    def __init__(
        self,
        probe: EnvironmentProbe,
        clock: Optional[Callable[[], int]] = None,
        default_ssat: Optional[int] = None,
    ):
        """Initialize the builder.

        Args:
            probe: Source of referrer, security and visibility signals
            clock: Returns the current time in epoch millis
            default_ssat: Auction type used when no request sets one
        """
        self._probe = probe
        self._clock = clock or _now_ms
        self._default_ssat = default_ssat if default_ssat is not None else settings.default_ssat

    def build(
        self,
        valid_requests: list[BidRequest],
        batch: BidderRequest,
        ambient: Optional[AmbientSignals] = None,
    ) -> ServerRequest:
        """Build the outbound request.

        Endpoint overrides and identity data come from the first bid of the
        original batch, not from the validated subset.

        Args:
            valid_requests: Requests that passed validation, in batch order
            batch: The full bidder request
            ambient: Persisted flag and A/B values of the client

        Returns:
            ServerRequest with URL and payload
        """
        ambient = ambient or AmbientSignals()
        if batch.bids:
            lead_params, lead_user_ids = batch.first_bid_fields()
        elif valid_requests:
            lead_params, lead_user_ids = valid_requests[0].params, valid_requests[0].user_id
        else:
            lead_params, lead_user_ids = None, None
        params = [bid.slot_params() for bid in valid_requests]

        payload = OutboundPayload(
            id=batch.auction_id,
            ref=self._probe.top_referrer() or None,
            ssl=self._probe.is_secure(),
            mpa=self._probe.is_main_page_accessible(),
            timeout=batch.timeout - (self._clock() - batch.auction_start),
            ssat=self._resolve_ssat(params),
            yl2=self._resolve_yl2(params, ambient),
            ab=ambient.ab,
        )

        if isinstance(lead_user_ids, Mapping) and lead_user_ids:
            payload.user = UserIds(euids=dict(lead_user_ids))

        consent = batch.gdpr_consent
        if consent is not None and consent.is_complete:
            payload.gdpr = GdprPayload(
                consent=consent.consent_string, applies=consent.gdpr_applies
            )

        for bid, slot in zip(valid_requests, params):
            payload.bids.append(
                PayloadBid(
                    bid=bid.bid_id,
                    sid=slot.sid,
                    siz=bid.banner_sizes(),
                    viz=self._probe.is_element_in_view(bid.ad_unit_code),
                )
            )

        url = build_url(Endpoint.from_params(lead_params))
        logger.debug(f"Built request for auction {batch.auction_id} with {len(payload.bids)} bids")
        return ServerRequest(method="POST", url=url, data=payload)

    def _resolve_ssat(self, params: list[BidParams]) -> int:
        return next((p.ssat for p in params if p.ssat), self._default_ssat)

    def _resolve_yl2(self, params: list[BidParams], ambient: AmbientSignals) -> bool:
        # Only a truthy yl2 counts as set; an explicit False still defers to
        # the persisted flag (see "yl2 and ssat explicit lookup" in DESIGN.md).
        if any(p.yl2 for p in params):
            return True
        return ambient.yield_test_enabled
