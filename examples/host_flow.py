#!/usr/bin/env python3
# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Host flow example.

Runs the adapter the way an auction host does: validate the bids of a
batch, build the vendor request, interpret a canned vendor response and
ask for user syncs. The page is an https article embedded in one frame.

Usage:
    python examples/host_flow.py
"""

import json
import time

from stroeer_core import AmbientSignals, StaticRuntime, create_adapter
from stroeer_core.clients import TrackingClient


def main():
    runtime = StaticRuntime.from_dict(
        {
            "frames": [
                {"href": "https://news.example.com/article", "referrer": "https://search.example.com/", "innerHeight": 900},
                {
                    "href": "https://ads.example.com/frame",
                    "innerHeight": 600,
                    "frameElement": {"top": 120, "height": 600},
                    "elements": [{"id": "div-top", "top": 0, "height": 250}],
                },
            ]
        }
    )
    now = int(time.time() * 1000)
    bidder_request = {
        "auctionId": "example-auction",
        "timeout": 1500,
        "auctionStart": now - 200,
        "gdprConsent": {"consentString": "BOtmiBKOtmiBKABABAENAFAAAAACeAAA", "gdprApplies": True},
        "bids": [
            {
                "bidId": "b1",
                "adUnitCode": "div-top",
                "mediaTypes": {"banner": {"sizes": [[728, 90], [970, 250]]}},
                "params": {"sid": "NDA="},
            },
            {
                "bidId": "b2",
                "adUnitCode": "div-video",
                "mediaTypes": {"video": {"playerSize": [640, 480]}},
                "params": {"sid": "ODA="},
            },
        ],
    }

    with TrackingClient() as tracker:
        adapter = create_adapter(runtime, tracker=tracker)

        print("=" * 50)
        print("Validation")
        print("=" * 50)
        valid = [bid for bid in bidder_request["bids"] if adapter.is_bid_request_valid(bid)]
        print(f"{len(valid)} of {len(bidder_request['bids'])} bids are valid")

        print("\n" + "=" * 50)
        print("Vendor request")
        print("=" * 50)
        request = adapter.build_requests(valid, bidder_request, AmbientSignals(ab={"variant": "b"}))
        print(json.dumps(request.to_wire(), indent=2))

        print("\n" + "=" * 50)
        print("Interpreted response")
        print("=" * 50)
        body = {"bids": [{"bidId": "b1", "cpm": 2.35, "width": 728, "height": 90, "ad": "<div>ad</div>"}]}
        for bid in adapter.interpret_response({"body": body}, request):
            print(bid)

        print(f"\nUser syncs: {adapter.get_user_syncs({'iframeEnabled': True}, [body])}")


if __name__ == "__main__":
    main()
