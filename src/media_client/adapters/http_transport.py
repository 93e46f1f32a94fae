"""HTTPX-backed media backend transport."""

from dataclasses import dataclass

import httpx

from media_client.config import normalize_base_url
from media_client.domain.assets import FileHandle, ProcessingSettings
from media_client.domain.results import ErrorKind, OperationResult
from media_client.services.operations import MediaTransport
from media_client.services.session import SessionAccessor

GENERIC_ERROR = "An error occurred"
MALFORMED_BODY = "Malformed response body"


def normalize_response(response: httpx.Response) -> OperationResult[object]:
    """Turn any HTTP response into a success or error result.

    JSON-declared bodies are parsed, anything else is kept as text. Failed
    statuses surface the payload's ``message`` when there is one.
    """
    content_type = response.headers.get("content-type", "")
    is_json = "application/json" in content_type
    payload: object
    if is_json:
        try:
            payload = response.json()
        except ValueError:
            if response.is_success:
                return OperationResult.failure(
                    MALFORMED_BODY, ErrorKind.INVALID_PAYLOAD
                )
            return OperationResult.failure(GENERIC_ERROR, ErrorKind.STATUS)
    else:
        payload = response.text

    if not response.is_success:
        message = payload.get("message") if isinstance(payload, dict) else None
        if not isinstance(message, str) or not message:
            message = GENERIC_ERROR
        return OperationResult.failure(message, ErrorKind.STATUS)
    return OperationResult.success(payload)


@dataclass
class HttpxMediaTransport(MediaTransport):
    """Media transport talking to the backend over HTTP."""

    base_url: str
    accessor: SessionAccessor
    http_client: httpx.AsyncClient
    timeout: float | None = None

    @classmethod
    def create(
        cls,
        base_url: str | None,
        accessor: SessionAccessor,
        timeout: float | None = None,
    ) -> "HttpxMediaTransport":
        """Create a transport with a managed httpx session."""
        return cls(
            base_url=normalize_base_url(base_url),
            accessor=accessor,
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def upload(self, file: FileHandle) -> OperationResult[object]:
        """Upload the file as multipart form data."""
        headers = self.accessor.authorization_headers()
        # httpx sets the multipart content type with its boundary.
        headers.pop("Content-Type", None)
        with file.open_body() as body:
            response = await self.http_client.post(
                f"{self.base_url}/videos/upload",
                headers=headers,
                files={"video": (file.name, body)},
                timeout=self.timeout,
            )
        return normalize_response(response)

    async def process(
        self, asset_id: str, settings: ProcessingSettings
    ) -> OperationResult[object]:
        """Request processing of an uploaded asset."""
        response = await self.http_client.post(
            f"{self.base_url}/videos/{asset_id}/process",
            headers=self.accessor.authorization_headers(),
            json=settings.to_wire(),
            timeout=self.timeout,
        )
        return normalize_response(response)

    async def list_assets(self) -> OperationResult[object]:
        """Fetch the asset listing."""
        response = await self.http_client.get(
            f"{self.base_url}/videos",
            headers=self.accessor.authorization_headers(),
            timeout=self.timeout,
        )
        return normalize_response(response)

    async def delete_asset(self, asset_id: str) -> OperationResult[object]:
        """Delete an asset by id."""
        response = await self.http_client.delete(
            f"{self.base_url}/videos/{asset_id}",
            headers=self.accessor.authorization_headers(),
            timeout=self.timeout,
        )
        return normalize_response(response)

    async def logout(self) -> OperationResult[object]:
        """Invalidate the current token on the server."""
        response = await self.http_client.post(
            f"{self.base_url}/auth/logout",
            headers=self.accessor.authorization_headers(),
            timeout=self.timeout,
        )
        return normalize_response(response)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
