# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Stroeer core bid adapter: bid request validation, vendor payload assembly
and response interpretation for header bidding hosts."""

from .adapter import AmbientSignals, BidAdapter, create_adapter
from .environment import StaticRuntime

__version__ = "0.1.0"

__all__ = ["AmbientSignals", "BidAdapter", "StaticRuntime", "create_adapter", "__version__"]
