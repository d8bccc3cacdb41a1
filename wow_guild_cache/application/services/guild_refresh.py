"""
Guild Refresh Service

Stale-while-revalidate lookups: cached guilds are answered at once while
every request also refreshes the guild from the Blizzard API.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Coroutine, Dict, Optional, Set

from ...core.protocols import (
    ErrorReporterProtocol,
    GuildAPIClientProtocol,
    GuildStoreProtocol,
)
from ...domain.guild.classifier import ClassifiedError, FailureKind, classify_error
from ...domain.guild.models import GuildRecord
from ...domain.guild.normalizer import normalize_guild

logger = logging.getLogger(__name__)

UNSUPPORTED_REGION_MESSAGE = "This region is not supported"
UPSTREAM_ERROR = "Blizzard API error"


@dataclass(frozen=True)
class LookupOutcome:
    """What the caller of a guild lookup gets back."""
    status_code: int
    guild: Optional[GuildRecord] = None
    body: Optional[Dict[str, Any]] = None
    source: Optional[str] = None

    @classmethod
    def found(cls, guild: GuildRecord, source: str) -> "LookupOutcome":
        return cls(status_code=200, guild=guild, body=guild.to_response(), source=source)

    @classmethod
    def not_found(cls) -> "LookupOutcome":
        return cls(status_code=404)

    @classmethod
    def failure(
        cls,
        status_code: int,
        error: str,
        message: Optional[str] = None
    ) -> "LookupOutcome":
        body: Dict[str, Any] = {"error": error}
        if message is not None:
            body["message"] = message
        return cls(status_code=status_code, body=body)


class ResponseSink:
    """Single channel back to the original caller, consumable once."""

    def __init__(self):
        self._future: asyncio.Future = asyncio.get_running_loop().create_future()

    @property
    def consumed(self) -> bool:
        return self._future.done()

    def emit(self, outcome: LookupOutcome) -> bool:
        """Deliver the outcome unless one was already delivered."""
        if self._future.done():
            return False
        self._future.set_result(outcome)
        return True

    async def wait(self) -> LookupOutcome:
        return await self._future


class GuildRefreshService:
    """Serves guild lookups from cache and refreshes them from upstream."""

    def __init__(
        self,
        store: GuildStoreProtocol,
        client: GuildAPIClientProtocol,
        reporter: ErrorReporterProtocol
    ):
        """
        Initialize the service.

        Args:
            store: Guild cache store
            client: Upstream guild API client
            reporter: Error telemetry sink
        """
        self.store = store
        self.client = client
        self.reporter = reporter
        self._background: Set[asyncio.Task] = set()

    @property
    def pending_tasks(self) -> int:
        return len(self._background)

    async def lookup_guild(
        self,
        region: str,
        realm: str,
        name: str
    ) -> LookupOutcome:
        """
        Answer a guild lookup.

        A cached guild is returned immediately and the refresh continues in
        the background; otherwise the caller waits for the upstream fetch.
        Upserts are never awaited here.
        """
        sink = ResponseSink()

        cached = await self._get_stored_guild(region, realm, name)
        if cached is not None:
            sink.emit(LookupOutcome.found(cached, source="cache"))

        self.spawn(
            self.fetch_guild(region, realm, name, None if sink.consumed else sink),
            name=f"refresh:{region}/{realm}/{name}"
        )
        return await sink.wait()

    async def fetch_guild(
        self,
        region: str,
        realm: str,
        name: str,
        sink: Optional[ResponseSink] = None
    ) -> Optional[GuildRecord]:
        """
        Fetch, normalize and store a guild. Exactly one upstream attempt.

        Args:
            region: Region code
            realm: Realm as supplied by the caller
            name: Guild name as supplied by the caller
            sink: Response channel, when the caller is still waiting

        Returns:
            The normalized guild, or None on failure
        """
        context = {"region": region, "realm": realm, "name": name}
        try:
            try:
                payload = await self.client.fetch_guild(region, realm, name)
                guild = normalize_guild(payload, region, realm, name)
            except Exception as e:
                self._handle_failure(classify_error(e), sink, context)
                return None

            if sink is not None:
                sink.emit(LookupOutcome.found(guild, source="upstream"))

            self.spawn(
                self.store.upsert(guild),
                name=f"upsert:{guild.region}/{guild.realm}/{guild.name}"
            )
            return guild
        finally:
            if sink is not None and not sink.consumed:
                sink.emit(LookupOutcome.failure(500, UPSTREAM_ERROR))

    def spawn(self, coro: Coroutine, name: Optional[str] = None) -> asyncio.Task:
        """Run a coroutine in the background; failures go to telemetry."""
        task = asyncio.create_task(coro, name=name)
        self._background.add(task)
        task.add_done_callback(self._on_background_done)
        return task

    async def drain(self) -> None:
        """Wait for all background work, including work it schedules."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    def _on_background_done(self, task: asyncio.Task) -> None:
        self._background.discard(task)
        if task.cancelled():
            logger.warning(f"Background task {task.get_name()} was cancelled")
            return

        error = task.exception()
        if error is not None:
            logger.error(f"Background task {task.get_name()} failed: {error}")
            self._report(error, {"task": task.get_name()})

    async def _get_stored_guild(
        self,
        region: str,
        realm: str,
        name: str
    ) -> Optional[GuildRecord]:
        try:
            return await self.store.lookup(region, realm, name)
        except Exception as e:
            # Serve from upstream as if nothing was cached
            self._report(e, {"region": region, "realm": realm, "name": name, "stage": "lookup"})
            return None

    def _handle_failure(
        self,
        failure: ClassifiedError,
        sink: Optional[ResponseSink],
        context: Dict[str, Any]
    ) -> None:
        if failure.should_report:
            self._report(failure.error, context)

        if failure.kind is FailureKind.UNSUPPORTED_REGION:
            outcome = LookupOutcome.failure(500, UNSUPPORTED_REGION_MESSAGE)
        elif failure.kind is FailureKind.NOT_FOUND:
            logger.info(
                f"Guild not found upstream: {context['region']}/"
                f"{context['realm']}/{context['name']}"
            )
            outcome = LookupOutcome.not_found()
        else:
            outcome = LookupOutcome.failure(
                failure.status_code,
                UPSTREAM_ERROR,
                failure.message
            )

        if sink is not None:
            sink.emit(outcome)

    def _report(self, error: BaseException, context: Dict[str, Any]) -> None:
        try:
            self.reporter.report(error, context)
        except Exception as e:
            logger.warning(f"Error reporter failed: {e}")
