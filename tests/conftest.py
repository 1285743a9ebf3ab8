# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Pytest configuration and fixtures."""

import copy

import pytest

from stroeer_core.environment import StaticBrowsingContext, StaticElement, StaticRuntime

USER_IDS = {
    "criteoId": "criteo-user-id",
    "digitrustid": {
        "data": {
            "id": "encrypted-user-id==",
            "keyv": 4,
            "privacy": {"optout": False},
            "producer": "ABC",
            "version": 2,
        }
    },
    "lipb": {"lipbid": "T7JiRRvsRAmh88", "segments": ["999"]},
}

TOP_REFERRER = "http://www.google.com/?query=monkey"


@pytest.fixture
def user_ids() -> dict:
    """Third party identity data attached to bids."""
    return copy.deepcopy(USER_IDS)


@pytest.fixture
def bidder_request(user_ids) -> dict:
    """Bidder request with two banner bids, as a host passes it."""
    return {
        "auctionId": "auction-123",
        "bidderRequestId": "bidder-request-id-123",
        "bidderCode": "stroeerCore",
        "timeout": 5000,
        "auctionStart": 10000,
        "bids": [
            {
                "bidId": "bid1",
                "bidder": "stroeerCore",
                "adUnitCode": "div-1",
                "mediaTypes": {"banner": {"sizes": [[300, 600], [160, 60]]}},
                "params": {"sid": "NDA="},
                "userId": user_ids,
            },
            {
                "bidId": "bid2",
                "bidder": "stroeerCore",
                "adUnitCode": "div-2",
                "mediaTypes": {"banner": {"sizes": [[728, 90]]}},
                "params": {"sid": "ODA="},
                "userId": user_ids,
            },
        ],
    }


@pytest.fixture
def legacy_bidder_request(bidder_request) -> dict:
    """Same bidder request in the pre-mediaTypes shape."""
    for bid in bidder_request["bids"]:
        bid["sizes"] = bid["mediaTypes"]["banner"]["sizes"]
        del bid["mediaTypes"]
        bid["mediaType"] = "banner"
    return bidder_request


@pytest.fixture
def placement_elements() -> list[StaticElement]:
    """Ad slot elements inside the adapter's frame."""
    return [StaticElement(id="div-1", top=17), StaticElement(id="div-2", top=54)]


@pytest.fixture
def single_runtime(placement_elements) -> StaticRuntime:
    """Adapter running in a top-level http page."""
    win = StaticBrowsingContext(
        href="http://www.xyz.com/", height=200, elements=placement_elements
    )
    return StaticRuntime(win)


@pytest.fixture
def nested_contexts(placement_elements) -> dict[str, StaticBrowsingContext]:
    """Top page > middle frame > adapter frame, all readable."""
    top = StaticBrowsingContext(href="http://www.abc.org/", referrer=TOP_REFERRER, height=800)
    mid = StaticBrowsingContext(
        href="http://www.abc.org/", parent_context=top, frame=StaticElement(), height=400
    )
    win = StaticBrowsingContext(
        href="http://www.xyz.com/",
        parent_context=mid,
        frame=StaticElement(top=304),
        height=200,
        elements=placement_elements,
    )
    return {"top": top, "mid": mid, "win": win}


@pytest.fixture
def nested_runtime(nested_contexts) -> StaticRuntime:
    """Runtime over the nested frame chain."""
    return StaticRuntime(nested_contexts["win"], nested_contexts["top"])


@pytest.fixture
def bidder_response() -> dict:
    """Vendor response with two bids."""
    return {
        "bids": [
            {
                "bidId": "bid1",
                "cpm": 4.0,
                "width": 300,
                "height": 600,
                "ad": "<div>tag1</div>",
                "tracking": {"brandId": 123},
            },
            {
                "bidId": "bid2",
                "cpm": 7.3,
                "width": 728,
                "height": 90,
                "ad": "<div>tag2</div>",
            },
        ]
    }
