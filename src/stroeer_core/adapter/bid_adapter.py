# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Capability object registered with the auction host.

The host passes plain mappings (camelCase keys, as on the wire); they are
parsed into models here before reaching the components.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Optional, Union

from pydantic import ValidationError

from ..config.settings import settings
from ..environment.context import ContextRuntime
from ..environment.probe import EnvironmentProbe
from ..models.bid_request import BidderRequest, BidRequest, MediaType
from ..models.payload import ServerRequest
from ..models.response import SyncOptions
from .request_builder import AmbientSignals, RequestBuilder
from .response_interpreter import ResponseInterpreter, response_body
from .user_sync import UserSyncProvider
from .validator import Validator

logger = logging.getLogger(__name__)

BidRequestInput = Union[BidRequest, Mapping[str, Any]]


def _as_bid_request(bid_request: BidRequestInput) -> BidRequest:
    if isinstance(bid_request, BidRequest):
        return bid_request
    return BidRequest.model_validate(dict(bid_request))


class BidAdapter:
    """Bid adapter entry points for the host's bidder registry."""

    def __init__(
        self,
        runtime: ContextRuntime,
        tracker: Optional[Callable[[str], Any]] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        """Initialize the adapter.

        Args:
            runtime: Browsing context chain the adapter runs in
            tracker: Fire-and-forget GET used for tracking endpoints
            clock: Returns the current time in epoch millis
        """
        self.code = settings.bidder_code
        self.supported_media_types = [MediaType.BANNER]
        self.validator = Validator()
        self.request_builder = RequestBuilder(EnvironmentProbe(runtime), clock=clock)
        self.response_interpreter = ResponseInterpreter(tracker=tracker)
        self.user_sync = UserSyncProvider()

    def is_bid_request_valid(self, bid_request: BidRequestInput) -> bool:
        try:
            parsed = _as_bid_request(bid_request)
        except ValidationError as e:
            logger.error(f"invalid bid: bid request could not be parsed: {e}")
            return False
        return self.validator.is_valid(parsed)

    def build_requests(
        self,
        valid_bid_requests: Sequence[BidRequestInput],
        bidder_request: Union[BidderRequest, Mapping[str, Any]],
        ambient: Optional[AmbientSignals] = None,
    ) -> ServerRequest:
        if not isinstance(bidder_request, BidderRequest):
            bidder_request = BidderRequest.model_validate(dict(bidder_request))
        valid = [_as_bid_request(b) for b in valid_bid_requests]
        return self.request_builder.build(valid, bidder_request, ambient)

    def interpret_response(
        self, server_response: Any, request: Optional[ServerRequest] = None
    ) -> list[dict[str, Any]]:
        bids = self.response_interpreter.interpret(response_body(server_response), request)
        return [bid.to_dict() for bid in bids]

    def get_user_syncs(
        self,
        sync_options: Union[SyncOptions, Mapping[str, Any]],
        server_responses: Sequence[Any],
    ) -> list[dict[str, Any]]:
        if not isinstance(sync_options, SyncOptions):
            sync_options = SyncOptions.model_validate(dict(sync_options))
        return [s.model_dump() for s in self.user_sync.get_syncs(sync_options, server_responses)]


def create_adapter(
    runtime: ContextRuntime,
    tracker: Optional[Callable[[str], Any]] = None,
    clock: Optional[Callable[[], int]] = None,
) -> BidAdapter:
    """Create the adapter for a runtime."""
    return BidAdapter(runtime, tracker=tracker, clock=clock)
