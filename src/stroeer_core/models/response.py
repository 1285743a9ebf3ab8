# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Pydantic models for vendor responses, normalized bids and user syncs."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from .bid_request import BidId


class ResponseBid(BaseModel):
    """Bid entry as returned by the vendor.

    Unknown fields (tracking, second price data, ...) are tolerated.
    """

    bid_id: Optional[BidId] = Field(default=None, alias="bidId")
    cpm: Optional[float] = None
    width: Optional[int] = None
    height: Optional[int] = None
    ad: Optional[str] = None
    bid_price_optimisation: Optional[dict[str, Any]] = Field(
        default=None, alias="bidPriceOptimisation"
    )

    model_config = {"populate_by_name": True, "extra": "allow"}


class ServerResponseBody(BaseModel):
    """Parsed vendor response body."""

    tep: Optional[str] = Field(default=None, description="Tracking endpoint URL")
    bids: list[ResponseBid]

    model_config = {"extra": "allow"}


class NormalizedBid(BaseModel):
    """Bid result in the shape the auction host consumes.

    ``extra`` holds price optimisation fields. They are applied last by
    :meth:`to_dict` and win on key collision with the standard fields.
    """

    request_id: Optional[BidId] = Field(default=None, alias="requestId")
    cpm: float = 0
    width: int = 0
    height: int = 0
    ad: Optional[str] = None
    ttl: int
    currency: str
    net_revenue: bool = Field(..., alias="netRevenue")
    creative_id: str = Field(default="", alias="creativeId")
    extra: dict[str, Any] = Field(default_factory=dict)

    model_config = {"populate_by_name": True}

    def to_dict(self) -> dict[str, Any]:
        """Flatten into a host bid dict with extra fields merged on top."""
        data = self.model_dump(by_alias=True, exclude={"extra"})
        data.update(self.extra)
        return data


class SyncOptions(BaseModel):
    """User sync options granted by the host."""

    iframe_enabled: bool = Field(default=False, alias="iframeEnabled")
    pixel_enabled: bool = Field(default=False, alias="pixelEnabled")

    model_config = {"populate_by_name": True}


class SyncDescriptor(BaseModel):
    """Passive sync page the host should embed."""

    type: str = "iframe"
    url: str
