"""Tests for the HTTP transport and response normalization."""

import asyncio
import json

import httpx

from media_client.adapters.http_transport import (
    HttpxMediaTransport,
    normalize_response,
)
from media_client.domain.assets import FileHandle, ProcessingSettings
from media_client.domain.results import ErrorKind
from media_client.services.operations import OperationClient
from media_client.services.session import Session, SessionAccessor
from tests.conftest import ManualScheduler


def _transport(handler, accessor: SessionAccessor) -> HttpxMediaTransport:
    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpxMediaTransport(
        base_url="https://api.test", accessor=accessor, http_client=async_client
    )


def test_normalize_json_success() -> None:
    result = normalize_response(httpx.Response(200, json={"id": "1"}))

    assert result.data == {"id": "1"}
    assert result.error is None


def test_normalize_text_success() -> None:
    result = normalize_response(httpx.Response(200, text="done"))

    assert result.data == "done"


def test_normalize_failure_uses_message() -> None:
    result = normalize_response(httpx.Response(422, json={"message": "Bad ratio"}))

    assert result.error == "Bad ratio"
    assert result.kind == ErrorKind.STATUS
    assert result.data is None


def test_normalize_failure_without_message() -> None:
    json_failure = normalize_response(httpx.Response(500, json={"detail": "x"}))
    text_failure = normalize_response(httpx.Response(502, text="Bad gateway"))

    assert json_failure.error == "An error occurred"
    assert text_failure.error == "An error occurred"


def test_normalize_malformed_json() -> None:
    response = httpx.Response(
        200, content=b"{oops", headers={"content-type": "application/json"}
    )
    failed = httpx.Response(
        500, content=b"{oops", headers={"content-type": "application/json"}
    )

    assert normalize_response(response).kind == ErrorKind.INVALID_PAYLOAD
    assert normalize_response(failed).error == "An error occurred"


def test_upload_sends_multipart_with_bearer(
    session: Session, accessor: SessionAccessor
) -> None:
    session.save("tok", None)
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["auth"] = request.headers.get("authorization")
        seen["content_type"] = request.headers.get("content-type")
        seen["body"] = request.content
        return httpx.Response(
            201,
            json={"id": "video-1", "name": "clip.mp4", "size": 4, "url": "https://x"},
        )

    transport = _transport(handler, accessor)
    result = asyncio.run(
        transport.upload(FileHandle("clip.mp4", 4, content=b"data"))
    )

    assert result.data == {
        "id": "video-1",
        "name": "clip.mp4",
        "size": 4,
        "url": "https://x",
    }
    assert seen["path"] == "/videos/upload"
    assert seen["auth"] == "Bearer tok"
    assert str(seen["content_type"]).startswith("multipart/form-data")
    assert b'name="video"' in seen["body"]


def test_process_sends_camel_case_settings(accessor: SessionAccessor) -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["payload"] = json.loads(request.content.decode())
        seen["auth"] = request.headers.get("authorization")
        return httpx.Response(200, json={"ok": True})

    transport = _transport(handler, accessor)
    asyncio.run(
        transport.process(
            "video-1",
            ProcessingSettings(
                platform="YouTube", aspect_ratio="16:9", resolution="4k"
            ),
        )
    )

    assert seen["path"] == "/videos/video-1/process"
    assert seen["payload"] == {
        "platform": "YouTube",
        "aspectRatio": "16:9",
        "resolution": "4k",
    }
    assert seen["auth"] is None


def test_list_delete_and_logout_routes(accessor: SessionAccessor) -> None:
    seen: list[tuple[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path))
        if request.method == "GET":
            return httpx.Response(200, json=[])
        return httpx.Response(204)

    transport = _transport(handler, accessor)

    async def scenario() -> None:
        await transport.list_assets()
        await transport.delete_asset("video-1")
        await transport.logout()
        await transport.close()

    asyncio.run(scenario())

    assert seen == [
        ("GET", "/videos"),
        ("DELETE", "/videos/video-1"),
        ("POST", "/auth/logout"),
    ]


def test_client_over_http_normalizes_server_errors(
    session: Session, accessor: SessionAccessor
) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/auth/logout":
            raise httpx.ConnectError("unreachable", request=request)
        return httpx.Response(403, json={"message": "Not allowed"})

    scheduler = ManualScheduler()
    client = OperationClient(
        transport=_transport(handler, accessor), session=session, scheduler=scheduler
    )
    session.save("tok", {"name": "Ada"})

    async def scenario():
        upload = await client.start_upload(
            FileHandle("clip.mp4", 4, content=b"data"), lambda _: None
        )
        listing = await client.list_assets()
        await client.end_session()
        return upload, listing

    upload, listing = asyncio.run(scenario())

    assert upload.error == "Not allowed"
    assert listing.error == "Not allowed"
    assert accessor.is_authenticated() is False
    assert scheduler.live_handles == []


def test_upload_without_content_is_a_transport_error(
    accessor: SessionAccessor, session: Session
) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={})

    client = OperationClient(
        transport=_transport(handler, accessor),
        session=session,
        scheduler=ManualScheduler(),
    )

    result = asyncio.run(client.start_upload(FileHandle("clip.mp4", 4)))

    assert result.error == "No content available for clip.mp4"
    assert result.kind == ErrorKind.TRANSPORT


def test_create_normalizes_base_url(accessor: SessionAccessor) -> None:
    transport = HttpxMediaTransport.create(" https://api.test/ ", accessor)
    fallback = HttpxMediaTransport.create(None, accessor)

    assert transport.base_url == "https://api.test"
    assert fallback.base_url == "http://localhost:5000"

    async def close() -> None:
        await transport.close()
        await fallback.close()

    asyncio.run(close())


def test_upload_streams_file_from_disk(accessor: SessionAccessor, tmp_path) -> None:
    source = tmp_path / "clip.mp4"
    source.write_bytes(b"frame-data" * 1000)
    seen: dict[str, bytes] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = request.content
        return httpx.Response(
            201,
            json={"id": "video-2", "name": "clip.mp4", "size": 10000, "url": "x"},
        )

    transport = _transport(handler, accessor)
    result = asyncio.run(transport.upload(FileHandle.from_path(source)))

    assert result.ok
    assert b'filename="clip.mp4"' in seen["body"]
    assert b"frame-data" * 1000 in seen["body"]
