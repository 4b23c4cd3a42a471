"""
Guide Service

Coordinates URL building, fetching, parsing and rendering for one guide
request. Nothing is written to the output until every page has been fetched
and parsed.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import TextIO

import httpx

from tvnow.config import Settings, get_settings
from tvnow.schemas import GuideRequest, ViewMode
from tvnow.services.document_fetcher import fetch_many, fetch_one
from tvnow.services.guide_types import ScheduleDocument
from tvnow.services.renderers import render
from tvnow.services.schedule_parser import parse_schedule
from tvnow.utils.logging_helpers import log_guide_end, log_guide_start
from tvnow.utils.timezone import WEEK_DAY_COUNT, broadcast_dates


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GuideContext:
    started_at: datetime
    urls: list[str] = field(default_factory=list)


class GuidePipeline:
    """Fetch, parse and render stages for one guide request."""

    def __init__(
        self,
        request: GuideRequest,
        *,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.request = request
        self.settings = settings or get_settings()
        self._transport = transport

    def build_urls(self, now: datetime) -> list[str]:
        """One URL for Snapshot/FullDay, one per broadcast day for Weekly."""
        variant = self.request.variant
        base_url = self.settings.base_url
        if self.request.mode is ViewMode.WEEKLY:
            return [variant.url(base_url, date) for date in broadcast_dates(now, WEEK_DAY_COUNT)]
        return [variant.url(base_url)]

    async def load(self, now: datetime | None = None) -> list[ScheduleDocument]:
        """
        Fetch and parse every page the request needs

        Args:
            now: Local time of the request (defaults to the current local time)

        Returns:
            Parsed pages, in broadcast-date order for Weekly

        Raises:
            FetchFailed: If any page could not be fetched
            ParseStructureError: If any page is structurally broken
        """
        context = GuideContext(started_at=now or datetime.now())
        context.urls = self.build_urls(context.started_at)
        log_guide_start(logger, self._variant_label(), self.request.mode.value)
        for url in context.urls:
            logger.debug("  URL: %s", url)

        timeout = self.settings.request_timeout_sec
        if len(context.urls) == 1:
            pages = [await fetch_one(context.urls[0], timeout=timeout, transport=self._transport)]
        else:
            pages = await fetch_many(context.urls, timeout=timeout, transport=self._transport)

        documents = [parse_schedule(page, strict=self.settings.strict_parsing) for page in pages]
        log_guide_end(logger, len(documents), sum(len(document) for document in documents))
        return documents

    async def run(self, out: TextIO, *, color_enabled: bool = False, now: datetime | None = None) -> None:
        """Load the request's pages and render them to `out`."""
        documents = await self.load(now)
        color = self.request.variant.color if color_enabled else None
        render(self.request.mode, documents, out, color=color)

    def _variant_label(self) -> str:
        variant = self.request.variant
        if variant.region_id is None:
            return variant.kind.name
        return f"{variant.kind.name}({variant.region_id})"


async def show_guide(
    request: GuideRequest,
    out: TextIO,
    *,
    settings: Settings | None = None,
    color_enabled: bool = False,
    now: datetime | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """
    Main entry point: render the guide for `request` to `out`.

    Raises:
        TvNowError: Any fetch or parse failure; nothing is written in that case
    """
    pipeline = GuidePipeline(request, settings=settings, transport=transport)
    await pipeline.run(out, color_enabled=color_enabled, now=now)
