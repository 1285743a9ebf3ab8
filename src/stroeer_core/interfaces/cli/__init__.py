# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Command line interface."""

from .main import app

__all__ = ["app"]
