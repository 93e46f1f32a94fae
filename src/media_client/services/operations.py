"""Operation client: upload, process, list and delete media assets."""

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Protocol, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from media_client.domain.assets import (
    AssetSummary,
    FileHandle,
    ProcessedAsset,
    ProcessingSettings,
    UploadedAsset,
)
from media_client.domain.results import ErrorKind, OperationResult
from media_client.services.progress import ProgressCallback, ProgressTracker
from media_client.services.scheduler import Scheduler
from media_client.services.session import Session

UPLOAD_FAILED = "Upload failed"
PROCESSING_FAILED = "Processing failed"
LIST_FAILED = "Failed to fetch videos"
DELETE_FAILED = "Failed to delete video"
INVALID_SETTINGS = "Invalid processing settings"

_ASSET_LIST = TypeAdapter(list[AssetSummary])

_logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class MediaTransport(Protocol):
    """Backend calls behind the operation client.

    Each call returns the raw payload wrapped in an ``OperationResult`` and
    may raise on transport failure.
    """

    async def upload(self, file: FileHandle) -> OperationResult[object]:
        """Send the file and return the created asset payload."""

    async def process(
        self, asset_id: str, settings: ProcessingSettings
    ) -> OperationResult[object]:
        """Process an uploaded asset and return the processed payload."""

    async def list_assets(self) -> OperationResult[object]:
        """Return the user's asset summaries."""

    async def delete_asset(self, asset_id: str) -> OperationResult[object]:
        """Delete an asset."""

    async def logout(self) -> OperationResult[object]:
        """Invalidate the session server-side."""


@dataclass
class OperationClient:
    """Runs backend operations and normalizes their outcome.

    Nothing raised by the transport escapes: failures come back as
    ``OperationResult`` errors. Long-running calls report progress through an
    optional callback whose timer is torn down before the call returns.
    """

    transport: MediaTransport
    session: Session
    scheduler: Scheduler
    progress_interval: float = 0.2
    progress_step: int = 5
    progress_cap: int = 95

    async def start_upload(
        self, file: FileHandle, on_progress: ProgressCallback | None = None
    ) -> OperationResult[UploadedAsset]:
        """Upload a file, reporting progress until the asset is created."""
        return await self._run_tracked(
            lambda: self.transport.upload(file),
            UploadedAsset,
            default_error=UPLOAD_FAILED,
            on_progress=on_progress,
            action="upload",
        )

    async def start_processing(
        self,
        asset_id: str,
        settings: ProcessingSettings | Mapping[str, object],
        on_progress: ProgressCallback | None = None,
    ) -> OperationResult[ProcessedAsset]:
        """Process an uploaded asset with the chosen output settings."""
        if not isinstance(settings, ProcessingSettings):
            try:
                settings = ProcessingSettings.model_validate(settings)
            except ValidationError:
                _logger.warning("Rejected processing settings for asset=%s", asset_id)
                return OperationResult.failure(
                    INVALID_SETTINGS, ErrorKind.INVALID_PAYLOAD
                )
        validated = settings
        return await self._run_tracked(
            lambda: self.transport.process(asset_id, validated),
            ProcessedAsset,
            default_error=PROCESSING_FAILED,
            on_progress=on_progress,
            action="process",
        )

    async def list_assets(self) -> OperationResult[list[AssetSummary]]:
        """Return the user's assets in creation order."""
        outcome = await self._call(
            self.transport.list_assets, default_error=LIST_FAILED, action="list"
        )
        if not outcome.ok:
            return _forward(outcome)
        try:
            assets = _ASSET_LIST.validate_python(outcome.data)
        except ValidationError:
            _logger.warning("Malformed asset listing payload")
            return OperationResult.failure(LIST_FAILED, ErrorKind.INVALID_PAYLOAD)
        return OperationResult.success(assets)

    async def delete_asset(self, asset_id: str) -> OperationResult[None]:
        """Delete an asset; unknown ids succeed."""
        outcome = await self._call(
            lambda: self.transport.delete_asset(asset_id),
            default_error=DELETE_FAILED,
            action="delete",
        )
        if not outcome.ok:
            return _forward(outcome)
        return OperationResult.success(None)

    async def end_session(self) -> None:
        """Best-effort server logout, then clear the local session."""
        try:
            outcome = await self.transport.logout()
        except Exception:
            _logger.exception("Logout error")
        else:
            if not outcome.ok:
                _logger.warning("Logout rejected by server: %s", outcome.error)
        try:
            self.session.clear()
        except Exception:
            _logger.exception("Failed to clear local session")

    async def _run_tracked(
        self,
        call: Callable[[], Awaitable[OperationResult[object]]],
        model: type[ModelT],
        *,
        default_error: str,
        on_progress: ProgressCallback | None,
        action: str,
    ) -> OperationResult[ModelT]:
        tracker = ProgressTracker(
            scheduler=self.scheduler,
            on_progress=on_progress,
            interval=self.progress_interval,
            step=self.progress_step,
            cap=self.progress_cap,
        )
        with tracker:
            outcome = await self._call(call, default_error=default_error, action=action)
            if not outcome.ok:
                return _forward(outcome)
            try:
                payload = model.model_validate(outcome.data)
            except ValidationError:
                _logger.warning("Malformed %s payload", action)
                return OperationResult.failure(default_error, ErrorKind.INVALID_PAYLOAD)
            tracker.finish()
        _logger.info("Operation %s completed", action)
        return OperationResult.success(payload)

    async def _call(
        self,
        call: Callable[[], Awaitable[OperationResult[object]]],
        *,
        default_error: str,
        action: str,
    ) -> OperationResult[object]:
        try:
            outcome = await call()
        except Exception as exc:
            message = str(exc) or default_error
            _logger.warning("Operation %s failed: %s", action, message)
            return OperationResult.failure(message, ErrorKind.TRANSPORT)
        if not outcome.ok:
            _logger.warning("Operation %s rejected: %s", action, outcome.error)
        return outcome


def _forward(outcome: OperationResult[object]) -> OperationResult:
    """Re-wrap a failed outcome under the caller's result type."""
    return OperationResult(
        error=outcome.error, kind=outcome.kind or ErrorKind.TRANSPORT
    )
