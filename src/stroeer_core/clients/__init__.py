# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Client implementations for the bid adapter."""

from .tracking_client import TrackingClient

__all__ = ["TrackingClient"]
