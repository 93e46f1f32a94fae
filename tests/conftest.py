"""Shared test fixtures."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from media_client.adapters.credential_stores import InMemoryCredentialStore
from media_client.config import Settings
from media_client.domain.assets import FileHandle, ProcessingSettings
from media_client.domain.results import OperationResult
from media_client.services.operations import MediaTransport, OperationClient
from media_client.services.scheduler import Scheduler
from media_client.services.session import Session, SessionAccessor


@dataclass
class ManualHandle:
    """Periodic handle fired by hand."""

    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler(Scheduler):
    """Scheduler whose ticks are driven by the test."""

    handles: list[ManualHandle] = field(default_factory=list)
    intervals: list[float] = field(default_factory=list)

    def every(self, interval: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(callback)
        self.handles.append(handle)
        self.intervals.append(interval)
        return handle

    def tick(self, times: int = 1) -> None:
        for _ in range(times):
            for handle in list(self.handles):
                if not handle.cancelled:
                    handle.callback()

    @property
    def live_handles(self) -> list[ManualHandle]:
        return [handle for handle in self.handles if not handle.cancelled]


@dataclass
class FakeMediaTransport(MediaTransport):
    """Transport returning canned payloads, optionally gated or failing."""

    upload_payload: object = field(
        default_factory=lambda: {
            "id": "video-abc1234",
            "name": "clip.mp4",
            "size": 1000,
            "url": "blob:media-client/fake",
        }
    )
    process_payload: object = field(
        default_factory=lambda: {
            "id": "video-abc1234",
            "processedUrl": "https://cdn.test/processed.mp4",
            "platform": "YouTube",
            "aspectRatio": "16:9",
            "resolution": "1080p",
            "processedAt": "2024-01-02T03:04:05+00:00",
        }
    )
    list_payload: object = field(default_factory=list)
    error: Exception | None = None
    logout_error: Exception | None = None
    result_override: OperationResult[object] | None = None
    gate: asyncio.Event | None = None
    calls: list[tuple[str, object]] = field(default_factory=list)

    async def upload(self, file: FileHandle) -> OperationResult[object]:
        return await self._respond("upload", file, self.upload_payload)

    async def process(
        self, asset_id: str, settings: ProcessingSettings
    ) -> OperationResult[object]:
        return await self._respond(
            "process", (asset_id, settings), self.process_payload
        )

    async def list_assets(self) -> OperationResult[object]:
        return await self._respond("list", None, self.list_payload)

    async def delete_asset(self, asset_id: str) -> OperationResult[object]:
        return await self._respond("delete", asset_id, None)

    async def logout(self) -> OperationResult[object]:
        self.calls.append(("logout", None))
        if self.logout_error is not None:
            raise self.logout_error
        return OperationResult.success(None)

    async def _respond(
        self, name: str, argument: object, payload: object
    ) -> OperationResult[object]:
        self.calls.append((name, argument))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        if self.result_override is not None:
            return self.result_override
        return OperationResult.success(payload)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_base_url="https://api.test",
        progress_interval_seconds=0.005,
        upload_duration_seconds=0.03,
        processing_duration_seconds=0.06,
    )


@pytest.fixture
def credential_store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture
def session(credential_store: InMemoryCredentialStore) -> Session:
    return Session(credential_store)


@pytest.fixture
def accessor(session: Session) -> SessionAccessor:
    return SessionAccessor(session)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def transport() -> FakeMediaTransport:
    return FakeMediaTransport()


@pytest.fixture
def client(
    transport: FakeMediaTransport, session: Session, scheduler: ManualScheduler
) -> OperationClient:
    return OperationClient(transport=transport, session=session, scheduler=scheduler)
