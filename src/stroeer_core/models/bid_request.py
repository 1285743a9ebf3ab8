# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Pydantic models for inbound bid requests and the auction batch."""

from collections.abc import Mapping
from enum import Enum
from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel, Field, field_validator

# Hosts hand out numeric as well as string bid ids.
BidId = Union[str, int]


class MediaType(str, Enum):
    """Media types a bid request can declare."""

    BANNER = "banner"
    VIDEO = "video"
    NATIVE = "native"


class BidParams(BaseModel):
    """Vendor-specific slot parameters of a bid request."""

    sid: Optional[str] = Field(default=None, description="Slot id")
    ssat: Optional[int] = Field(
        default=None, description="Server side auction type (1 or 2)"
    )
    yl2: Optional[bool] = Field(default=None, description="Yield test flag")

    model_config = {"extra": "allow"}


class Endpoint(BaseModel):
    """Endpoint overrides carried in bid params."""

    host: Optional[str] = None
    port: Optional[str] = None
    secure_port: Optional[str] = Field(default=None, alias="securePort")
    path: Optional[str] = None

    model_config = {"populate_by_name": True}

    @field_validator("port", "secure_port", mode="before")
    @classmethod
    def _port_as_str(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value) if value else None
        return value

    @classmethod
    def from_params(cls, params: Any) -> "Endpoint":
        """Read endpoint overrides from raw bid params.

        Params that are not a mapping yield an empty override.
        """
        if not isinstance(params, Mapping):
            return cls()
        overrides = {
            key: params[key]
            for key in ("host", "port", "securePort", "path")
            if params.get(key) is not None
        }
        return cls.model_validate(overrides)


class BidRequest(BaseModel):
    """A single ad slot's request for a price quote.

    ``params`` is kept raw; it is only interpreted as :class:`BidParams`
    once the request passed validation.
    """

    bid_id: Optional[BidId] = Field(default=None, alias="bidId")
    bidder: Optional[str] = None
    ad_unit_code: Optional[str] = Field(default=None, alias="adUnitCode")
    media_types: Optional[dict[str, Any]] = Field(default=None, alias="mediaTypes")
    media_type: Optional[str] = Field(default=None, alias="mediaType")
    sizes: Optional[list[Any]] = None
    params: Any = None
    user_id: Optional[dict[str, Any]] = Field(default=None, alias="userId")

    model_config = {"populate_by_name": True, "extra": "allow"}

    def slot_params(self) -> BidParams:
        """Parse params into typed slot parameters."""
        if isinstance(self.params, Mapping):
            return BidParams.model_validate(dict(self.params))
        return BidParams()

    def banner_sizes(self) -> list[Any]:
        """Declared sizes, preferring the structured banner sizes.

        Falls back to the legacy flat ``sizes`` field, then to an empty list.
        """
        banner = (self.media_types or {}).get(MediaType.BANNER.value)
        if isinstance(banner, Mapping) and banner.get("sizes") is not None:
            return list(banner["sizes"])
        if self.sizes is not None:
            return list(self.sizes)
        return []


class GdprConsent(BaseModel):
    """Consent data passed through from the host."""

    consent_string: Optional[str] = Field(default=None, alias="consentString")
    gdpr_applies: Optional[bool] = Field(default=None, alias="gdprApplies")

    model_config = {"populate_by_name": True}

    @property
    def is_complete(self) -> bool:
        """Both values present; an explicit ``False`` for applies counts."""
        return self.consent_string is not None and self.gdpr_applies is not None


class BidderRequest(BaseModel):
    """Batch of bid requests submitted together for one auction."""

    auction_id: Optional[str] = Field(default=None, alias="auctionId")
    bidder_request_id: Optional[str] = Field(default=None, alias="bidderRequestId")
    bidder_code: Optional[str] = Field(default=None, alias="bidderCode")
    bids: list[Annotated[Union[BidRequest, Any], Field(union_mode="left_to_right")]] = Field(
        default_factory=list,
        description="Original bid requests; entries that do not parse are kept raw",
    )
    auction_start: int = Field(..., alias="auctionStart", description="Epoch millis")
    timeout: int = Field(..., description="Auction timeout budget in millis")
    gdpr_consent: Optional[GdprConsent] = Field(default=None, alias="gdprConsent")

    model_config = {"populate_by_name": True, "extra": "allow"}

    def first_bid_fields(self) -> tuple[Any, Any]:
        """Raw ``params`` and ``userId`` of the first original bid.

        Returns:
            Tuple of (params, user ids); None for whatever cannot be read
        """
        if not self.bids:
            return None, None
        first = self.bids[0]
        if isinstance(first, BidRequest):
            return first.params, first.user_id
        if isinstance(first, Mapping):
            return first.get("params"), first.get("userId")
        return None, None
