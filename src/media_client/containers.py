"""Dependency container wiring for the client."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from media_client.adapters.credential_stores import (
    InMemoryCredentialStore,
    JsonFileCredentialStore,
)
from media_client.adapters.http_transport import HttpxMediaTransport
from media_client.adapters.simulated_transport import SimulatedMediaTransport
from media_client.app_logging import configure_logging
from media_client.config import Settings
from media_client.services.operations import OperationClient
from media_client.services.scheduler import AsyncioScheduler
from media_client.services.session import CredentialStore, Session, SessionAccessor


@dataclass
class AppContainer:
    """Holds client-wide dependencies."""

    settings: Settings
    session: Session
    session_accessor: SessionAccessor
    scheduler: AsyncioScheduler
    transport: HttpxMediaTransport | SimulatedMediaTransport
    operation_client: OperationClient
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level)
    store: CredentialStore
    if resolved_settings.session_store_path is not None:
        store = JsonFileCredentialStore(resolved_settings.session_store_path)
    else:
        store = InMemoryCredentialStore()
    session = Session(store)
    accessor = SessionAccessor(session)
    scheduler = AsyncioScheduler()
    transport: HttpxMediaTransport | SimulatedMediaTransport
    if resolved_settings.transport == "http":
        transport = HttpxMediaTransport.create(
            base_url=resolved_settings.api_base_url,
            accessor=accessor,
            timeout=resolved_settings.http_timeout_seconds,
        )
    else:
        transport = SimulatedMediaTransport(
            upload_delay_seconds=resolved_settings.upload_duration_seconds,
            processing_delay_seconds=resolved_settings.processing_duration_seconds,
        )
    operation_client = OperationClient(
        transport=transport,
        session=session,
        scheduler=scheduler,
        progress_interval=resolved_settings.progress_interval_seconds,
        progress_step=resolved_settings.progress_step,
        progress_cap=resolved_settings.progress_cap,
    )

    async def close_resources() -> None:
        await transport.close()

    return AppContainer(
        settings=resolved_settings,
        session=session,
        session_accessor=accessor,
        scheduler=scheduler,
        transport=transport,
        operation_client=operation_client,
        close_resources=close_resources,
    )
