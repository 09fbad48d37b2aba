"""
Source adapters.

Every adapter is an ``async lookup(word, client) -> SourceResult`` callable
that never raises; ADAPTERS maps each SourceId to its adapter.
"""

from typing import Awaitable, Callable

import httpx

from config.config import SourceId
from models.source_result import SourceResult

from . import aksozluk_client, etimolojiturkce_client, nisanyan_client, tdk_client

Adapter = Callable[[str, httpx.AsyncClient], Awaitable[SourceResult]]

ADAPTERS: dict[SourceId, Adapter] = {
    SourceId.STRUCTURED: nisanyan_client.lookup,
    SourceId.PLAIN: tdk_client.lookup,
    SourceId.SCRAPE_A: aksozluk_client.lookup,
    SourceId.SCRAPE_B: etimolojiturkce_client.lookup,
}

__all__ = ["ADAPTERS", "Adapter"]
