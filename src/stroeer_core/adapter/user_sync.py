# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""User sync decision."""

from collections.abc import Sequence
from typing import Any, Optional

from ..config.settings import settings
from ..models.response import SyncDescriptor, SyncOptions


class UserSyncProvider:
    """Offers the vendor sync page once a response was received."""

    def __init__(self, sync_url: Optional[str] = None):
        self.sync_url = sync_url or settings.user_sync_url

    def get_syncs(self, options: SyncOptions, responses: Sequence[Any]) -> list[SyncDescriptor]:
        if options.iframe_enabled and len(responses) > 0:
            return [SyncDescriptor(type="iframe", url=self.sync_url)]
        return []
