# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Pydantic models for the outbound vendor request."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from .bid_request import BidId


class PayloadBid(BaseModel):
    """Per-bid entry of the outbound payload."""

    bid: Optional[BidId] = Field(default=None, description="Bid id")
    sid: str = Field(..., description="Slot id")
    siz: list[Any] = Field(default_factory=list, description="Sizes")
    viz: Optional[bool] = Field(
        default=None, description="In view; None when visibility is unknown"
    )


class UserIds(BaseModel):
    """Third party identity data."""

    euids: dict[str, Any]


class GdprPayload(BaseModel):
    """Consent data as sent to the vendor."""

    consent: str
    applies: bool


class OutboundPayload(BaseModel):
    """JSON body posted to the vendor endpoint."""

    id: Optional[str] = None
    bids: list[PayloadBid] = Field(default_factory=list)
    ref: Optional[str] = None
    ssl: bool
    mpa: bool
    timeout: int
    ssat: int
    yl2: bool
    ab: Optional[dict[str, Any]] = None
    user: Optional[UserIds] = None
    gdpr: Optional[GdprPayload] = None

    def to_wire(self) -> dict[str, Any]:
        """Serialize for the wire; absent fields are dropped."""
        return self.model_dump(exclude_none=True)


class ServerRequest(BaseModel):
    """Request descriptor handed to the host transport."""

    method: str = "POST"
    url: str
    data: OutboundPayload

    def to_wire(self) -> dict[str, Any]:
        """Serialize with the payload in wire form."""
        return {"method": self.method, "url": self.url, "data": self.data.to_wire()}
