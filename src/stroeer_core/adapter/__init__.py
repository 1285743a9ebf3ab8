# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Bid adapter components."""

from .bid_adapter import BidAdapter, create_adapter
from .request_builder import AmbientSignals, RequestBuilder, build_url
from .response_interpreter import (
    ResponseError,
    ResponseInterpreter,
    UnsupportedResponseError,
    response_body,
)
from .user_sync import UserSyncProvider
from .validator import Validator

__all__ = [
    # Registration
    "BidAdapter",
    "create_adapter",
    # Components
    "AmbientSignals",
    "RequestBuilder",
    "build_url",
    "ResponseError",
    "ResponseInterpreter",
    "UnsupportedResponseError",
    "response_body",
    "UserSyncProvider",
    "Validator",
]
