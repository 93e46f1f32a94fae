"""Records exchanged with the media backend."""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class FileHandle:
    """A file selected for upload."""

    name: str
    size: int
    path: Path | None = None
    content: bytes | None = None

    @classmethod
    def from_path(cls, path: str | Path) -> "FileHandle":
        """Build a handle from a file on disk."""
        resolved = Path(path).resolve()
        return cls(name=resolved.name, size=resolved.stat().st_size, path=resolved)

    def local_reference(self) -> str:
        """Return a temporary local URL for the file."""
        if self.path is not None:
            return self.path.resolve().as_uri()
        return f"blob:media-client/{uuid4()}"

    @contextmanager
    def open_body(self) -> Iterator[bytes | BinaryIO]:
        """Yield the upload body; path-backed files are streamed from disk."""
        if self.content is not None:
            yield self.content
            return
        if self.path is None:
            raise ValueError(f"No content available for {self.name}")
        with self.path.open("rb") as body:
            yield body


class UploadedAsset(BaseModel):
    """Asset created by a completed upload."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    name: str
    size: int = Field(ge=0)
    locator_url: str = Field(alias="url")


class ProcessingSettings(BaseModel):
    """Caller-chosen output settings, passed through to the backend."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    platform: str = Field(min_length=1)
    aspect_ratio: str = Field(alias="aspectRatio", min_length=1)
    resolution: str = Field(min_length=1)

    def to_wire(self) -> dict[str, str]:
        """Serialize with the backend's camelCase keys."""
        return self.model_dump(by_alias=True)


class ProcessedAsset(BaseModel):
    """Result of a completed processing run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    processed_url: str = Field(alias="processedUrl")
    platform: str
    aspect_ratio: str = Field(alias="aspectRatio")
    resolution: str
    processed_at: datetime = Field(alias="processedAt")


class AssetSummary(BaseModel):
    """Row of the user's asset listing."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    platform: str
    date: str
    status: Literal["processing", "completed"]
    thumbnail: str
    duration: str
    size: str
