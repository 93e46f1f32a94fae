"""Credential store implementations."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from media_client.services.session import CredentialStore

_logger = logging.getLogger(__name__)


@dataclass
class InMemoryCredentialStore(CredentialStore):
    """Process-local store; cleared when the process exits."""

    items: dict[str, str] = field(default_factory=dict)

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


@dataclass
class JsonFileCredentialStore(CredentialStore):
    """Store persisted as a single JSON object on disk."""

    path: Path

    def get_item(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read()
        if items.pop(key, None) is not None:
            self._write(items)

    def _read(self) -> dict[str, object]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError:
            _logger.warning("Credential store unreadable: %s", self.path)
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            _logger.warning("Credential store is not valid JSON: %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, items: dict[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(items), encoding="utf-8")
