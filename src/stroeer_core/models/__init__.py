# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Data models for the bid adapter."""

from .bid_request import (
    BidderRequest,
    BidParams,
    BidRequest,
    Endpoint,
    GdprConsent,
    MediaType,
)
from .payload import (
    GdprPayload,
    OutboundPayload,
    PayloadBid,
    ServerRequest,
    UserIds,
)
from .response import (
    NormalizedBid,
    ResponseBid,
    ServerResponseBody,
    SyncDescriptor,
    SyncOptions,
)

__all__ = [
    # Inbound models
    "BidderRequest",
    "BidParams",
    "BidRequest",
    "Endpoint",
    "GdprConsent",
    "MediaType",
    # Outbound models
    "GdprPayload",
    "OutboundPayload",
    "PayloadBid",
    "ServerRequest",
    "UserIds",
    # Response models
    "NormalizedBid",
    "ResponseBid",
    "ServerResponseBody",
    "SyncDescriptor",
    "SyncOptions",
]
