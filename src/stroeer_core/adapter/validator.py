# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Static acceptance rules for inbound bid requests."""

import logging
from collections.abc import Mapping
from typing import Callable

from ..models.bid_request import BidRequest, MediaType

logger = logging.getLogger(__name__)

Rule = tuple[Callable[[BidRequest], bool], str]


def _is_banner(bid_request: BidRequest) -> bool:
    # No media type declared at all is accepted for legacy hosts
    if bid_request.media_types is None and bid_request.media_type is None:
        return True
    if bid_request.media_types is not None and bid_request.media_types.get(MediaType.BANNER.value) is not None:
        return True
    return bid_request.media_type == MediaType.BANNER.value


def _has_params(bid_request: BidRequest) -> bool:
    return isinstance(bid_request.params, Mapping)


def _has_sid(bid_request: BidRequest) -> bool:
    return isinstance(bid_request.params.get("sid"), str)


def _has_valid_ssat(bid_request: BidRequest) -> bool:
    if "ssat" not in bid_request.params:
        return True
    ssat = bid_request.params["ssat"]
    return not isinstance(ssat, bool) and ssat in (1, 2)


class Validator:
    """Accepts or rejects bid requests.

    Rules are checked in order and the first failing one is logged.
    Rejection only reports False; excluding the request is up to the host.
    """

    def __init__(self) -> None:
        self._rules: list[Rule] = [
            (_is_banner, "is not a banner"),
            (_has_params, "does not have custom params"),
            (_has_sid, "does not have a sid string field"),
            (_has_valid_ssat, "does not have a valid ssat value (must be 1 or 2)"),
        ]

    def is_valid(self, bid_request: BidRequest) -> bool:
        """Check a bid request against every rule.

        Args:
            bid_request: The bid request to check

        Returns:
            True if all rules hold
        """
        for check, reason in self._rules:
            if not check(bid_request):
                logger.error(f"invalid bid: bid request {bid_request.bid_id} {reason}")
                return False
        return True
