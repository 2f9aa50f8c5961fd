"""
HTTP client for the stats service.

The main service records a hit for every public event read and decorates
event representations with view counts. Views are decoration, not data the
caller asked to change, so the read helpers fail soft: a stats outage is
logged and counted, and the caller sees zero views instead of an error.
"""

from datetime import datetime, timedelta
from typing import Any, Iterable, Optional

import httpx

from explorewithme.core.config import get_settings
from explorewithme.core.dates import format_date_time, now
from explorewithme.core.logging import get_logger
from explorewithme.core.metrics import record_stats_client_error

logger = get_logger(__name__)

# getViewsForEvent looks back over a 100-year window ending now
VIEWS_WINDOW = timedelta(days=365 * 100)

# About 21 bytes of query string per URI; 200 keeps a /stats URL near 4 KB
VIEWS_BATCH_SIZE = 200


class StatsClientError(Exception):
    """Raised when the stats service cannot be reached or answers with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def event_uri(event_id: int) -> str:
    return f"/events/{event_id}"


class StatsClient:
    """
    Async client for the stats service REST API.

    Attributes:
        base_url: Base URL of the stats service
        app_name: Value sent as `app` with every recorded hit
    """

    def __init__(
        self,
        base_url: str,
        app_name: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not base_url:
            raise ValueError("base_url is required")

        self.base_url = base_url.rstrip("/")
        self.app_name = app_name
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def close(self) -> None:
        await self._client.aclose()

    # -------------------------------------------------------------------------
    # Raw API
    # -------------------------------------------------------------------------

    async def save_hit(self, uri: str, ip: str, timestamp: Optional[datetime] = None) -> None:
        """
        Record one endpoint hit.

        Raises:
            StatsClientError: If the stats service is unreachable or refuses the hit
        """
        payload = {
            "app": self.app_name,
            "uri": uri,
            "ip": ip,
            "timestamp": format_date_time(timestamp or now()),
        }
        try:
            response = await self._client.post("/hit", json=payload)
        except httpx.HTTPError as e:
            raise StatsClientError(f"Failed to save hit: {e}")

        if not response.is_success:
            raise StatsClientError(
                f"Saving hit failed with status {response.status_code}",
                status_code=response.status_code,
            )

    async def get_stats(
        self,
        start: datetime,
        end: datetime,
        uris: Optional[list[str]] = None,
        unique: bool = False,
    ) -> list[dict[str, Any]]:
        """
        Fetch aggregated hit counts as a list of {app, uri, hits}.

        Raises:
            StatsClientError: If the stats service is unreachable or answers with an error
        """
        params: list[tuple[str, str]] = [
            ("start", format_date_time(start)),
            ("end", format_date_time(end)),
            ("unique", "true" if unique else "false"),
        ]
        for uri in uris or []:
            params.append(("uris", uri))

        try:
            response = await self._client.get("/stats", params=params)
        except httpx.HTTPError as e:
            raise StatsClientError(f"Failed to fetch stats: {e}")

        if not response.is_success:
            raise StatsClientError(
                f"Fetching stats failed with status {response.status_code}",
                status_code=response.status_code,
            )
        return response.json()

    # -------------------------------------------------------------------------
    # Event views
    # -------------------------------------------------------------------------

    async def increment_view(self, event_id: int, ip: str) -> None:
        await self.save_hit(event_uri(event_id), ip)

    async def record_hit(self, uri: str, ip: Optional[str]) -> None:
        """Fail-soft save_hit for read paths; a missing IP records nothing."""
        if not ip:
            return
        try:
            await self.save_hit(uri, ip)
        except StatsClientError as e:
            record_stats_client_error("save_hit")
            logger.warning("stats_hit_not_recorded", uri=uri, error=str(e))

    async def get_views(self, event_ids: Iterable[int]) -> dict[int, int]:
        """
        Non-unique view counts keyed by event id; events without hits map to 0.

        URIs are sent in batches of VIEWS_BATCH_SIZE so the /stats request line
        stays well under the server's request-head limit however many events
        are asked about. If a batch fails, the counts gathered so far are kept
        and the remaining events report 0.
        """
        ids = list(dict.fromkeys(event_ids))
        if not ids:
            return {}

        views = {event_id: 0 for event_id in ids}
        uri_to_id = {event_uri(event_id): event_id for event_id in ids}
        uris = list(uri_to_id)
        end = datetime.now()
        for offset in range(0, len(uris), VIEWS_BATCH_SIZE):
            batch = uris[offset:offset + VIEWS_BATCH_SIZE]
            try:
                stats = await self.get_stats(end - VIEWS_WINDOW, end, batch, unique=False)
            except StatsClientError as e:
                record_stats_client_error("get_stats")
                logger.warning(
                    "stats_views_unavailable",
                    event_count=len(ids),
                    failed_from=offset,
                    error=str(e),
                )
                return views

            for entry in stats:
                event_id = uri_to_id.get(entry.get("uri"))
                if event_id is not None:
                    views[event_id] += int(entry.get("hits", 0))
        return views

    async def get_views_for_event(self, event_id: int) -> int:
        views = await self.get_views([event_id])
        return views.get(event_id, 0)


_stats_client: Optional[StatsClient] = None


def get_stats_client() -> StatsClient:
    """FastAPI dependency: process-wide stats client built from settings."""
    global _stats_client

    if _stats_client is None:
        settings = get_settings()
        _stats_client = StatsClient(
            base_url=settings.STATS_SERVER_URL,
            app_name=settings.STATS_APP_NAME,
            timeout=settings.STATS_CLIENT_TIMEOUT,
        )
    return _stats_client


async def close_stats_client() -> None:
    """Close the stats client on shutdown."""
    global _stats_client
    if _stats_client:
        await _stats_client.close()
        _stats_client = None
