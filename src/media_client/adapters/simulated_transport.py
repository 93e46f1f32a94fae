"""In-process demo backend with simulated latency."""

import asyncio
import secrets
import string
from dataclasses import dataclass, field
from datetime import UTC, datetime

from media_client.domain.assets import FileHandle, ProcessingSettings
from media_client.domain.results import OperationResult
from media_client.services.operations import MediaTransport

DEMO_PROCESSED_URL = (
    "https://images.unsplash.com/photo-1626544827763-d516dce335e2?w=800&q=80"
)

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_LENGTH = 7


def _demo_catalog() -> list[dict[str, object]]:
    return [
        {
            "id": "1",
            "name": "Product Promo Video",
            "platform": "YouTube",
            "date": "2023-06-15",
            "status": "completed",
            "thumbnail": (
                "https://images.unsplash.com/photo-1611162616475-46b635cb6868"
                "?w=300&q=80"
            ),
            "duration": "2:45",
            "size": "24.5 MB",
        },
        {
            "id": "2",
            "name": "Social Media Ad",
            "platform": "Instagram",
            "date": "2023-06-14",
            "status": "completed",
            "thumbnail": (
                "https://images.unsplash.com/photo-1611162616305-c69b3396f6b4"
                "?w=300&q=80"
            ),
            "duration": "0:30",
            "size": "8.2 MB",
        },
        {
            "id": "3",
            "name": "Tutorial Video",
            "platform": "TikTok",
            "date": "2023-06-13",
            "status": "processing",
            "thumbnail": (
                "https://images.unsplash.com/photo-1611162618071-b39a2ec055fb"
                "?w=300&q=80"
            ),
            "duration": "1:15",
            "size": "15.7 MB",
        },
    ]


@dataclass
class SimulatedMediaTransport(MediaTransport):
    """Demo transport that keeps its catalog in memory."""

    upload_delay_seconds: float = 3.0
    processing_delay_seconds: float = 5.0
    catalog: list[dict[str, object]] = field(default_factory=_demo_catalog)
    _minted: set[str] = field(default_factory=set)

    async def upload(self, file: FileHandle) -> OperationResult[object]:
        await asyncio.sleep(self.upload_delay_seconds)
        asset_id = self._mint_id()
        url = file.local_reference()
        self.catalog.append(
            {
                "id": asset_id,
                "name": file.name,
                "platform": "",
                "date": datetime.now(tz=UTC).date().isoformat(),
                "status": "processing",
                "thumbnail": url,
                "duration": "0:00",
                "size": _format_size(file.size),
            }
        )
        return OperationResult.success(
            {"id": asset_id, "name": file.name, "size": file.size, "url": url}
        )

    async def process(
        self, asset_id: str, settings: ProcessingSettings
    ) -> OperationResult[object]:
        await asyncio.sleep(self.processing_delay_seconds)
        for entry in self.catalog:
            if entry["id"] == asset_id:
                entry["status"] = "completed"
                entry["platform"] = settings.platform
        return OperationResult.success(
            {
                "id": asset_id,
                "processedUrl": DEMO_PROCESSED_URL,
                **settings.to_wire(),
                "processedAt": datetime.now(tz=UTC).isoformat(),
            }
        )

    async def list_assets(self) -> OperationResult[object]:
        return OperationResult.success([dict(entry) for entry in self.catalog])

    async def delete_asset(self, asset_id: str) -> OperationResult[object]:
        self.catalog[:] = [entry for entry in self.catalog if entry["id"] != asset_id]
        return OperationResult.success(None)

    async def logout(self) -> OperationResult[object]:
        return OperationResult.success(None)

    async def close(self) -> None:
        return None

    def _mint_id(self) -> str:
        taken = self._minted | {str(entry["id"]) for entry in self.catalog}
        while True:
            suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))
            asset_id = f"video-{suffix}"
            if asset_id not in taken:
                self._minted.add(asset_id)
                return asset_id


def _format_size(size: int) -> str:
    return f"{size / 1_000_000:.1f} MB"
