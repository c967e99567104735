"""Per-test configuration resolution."""

import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from splitsmith.dx.errors import ConfigurationError
from splitsmith.io.ser import ConnectionSpec, TestConfig
from splitsmith.utils.logging import get_logger

logger = get_logger("config")

_OVERRIDE_KEYS = {"connection", "ttl_millis", "count_duplicates"}


def _check_keys(entry: Dict[str, Any], where: str) -> Dict[str, Any]:
    unknown = set(entry) - _OVERRIDE_KEYS
    if unknown:
        raise ConfigurationError(
            f"Unknown config key(s) in {where}: {sorted(unknown)}. "
            f"Allowed: {sorted(_OVERRIDE_KEYS)}"
        )
    return dict(entry)


class ConfigResolver:
    """
    Resolves the effective ``TestConfig`` for a test id.

    Holds a global default entry, per-test override entries, and the
    process connection spec. ``resolve`` overlays the test entry on the
    default key by key (test wins). Setters swap whole entries under a lock,
    so a resolve sees either the old or the new state, never a mix.
    """

    def __init__(
        self,
        default: Optional[Dict[str, Any]] = None,
        per_test: Optional[Dict[str, Dict[str, Any]]] = None,
        connection: Optional[Union[ConnectionSpec, Dict[str, Any]]] = None,
    ):
        self._lock = threading.Lock()
        self._default = _check_keys(default or {}, "default")
        self._per_test = {
            test_id: _check_keys(entry or {}, f"per_test[{test_id!r}]")
            for test_id, entry in (per_test or {}).items()
        }
        self._connection = self._to_connection(connection)

    @staticmethod
    def _to_connection(connection: Optional[Union[ConnectionSpec, Dict[str, Any]]]) -> ConnectionSpec:
        if connection is None:
            return ConnectionSpec()
        if isinstance(connection, ConnectionSpec):
            return connection
        try:
            return ConnectionSpec(**connection)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid connection spec: {e}") from e

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConfigResolver":
        """Build from ``{default: {...}, per_test: {test_id: {...}}, connection: {...}}``."""
        unknown = set(data) - {"default", "per_test", "connection"}
        if unknown:
            raise ConfigurationError(f"Unknown top-level config key(s): {sorted(unknown)}")
        return cls(
            default=data.get("default"),
            per_test=data.get("per_test"),
            connection=data.get("connection"),
        )

    @classmethod
    def from_yaml(cls, file_path: Union[str, Path]) -> "ConfigResolver":
        """Load configuration from a YAML file."""
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {file_path} must contain a mapping")
        logger.info(f"Loaded configuration from {file_path}")
        return cls.from_dict(data)

    def resolve(self, test_id: str) -> TestConfig:
        """Return the effective config for ``test_id``."""
        with self._lock:
            merged: Dict[str, Any] = {"connection": self._connection}
            merged.update(self._default)
            merged.update(self._per_test.get(test_id, {}))

        connection = merged["connection"]
        if isinstance(connection, dict):
            merged["connection"] = self._to_connection(connection)
        try:
            return TestConfig(**merged)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid config for test '{test_id}': {e}") from e

    @property
    def connection(self) -> ConnectionSpec:
        with self._lock:
            return self._connection

    def set_connection(self, connection: Union[ConnectionSpec, Dict[str, Any]]) -> None:
        spec = self._to_connection(connection)
        with self._lock:
            self._connection = spec

    def set_default(self, **overrides: Any) -> None:
        """Merge keys into the global default entry."""
        entry = _check_keys(overrides, "default")
        with self._lock:
            self._default = {**self._default, **entry}
        logger.info(f"Updated default config keys: {sorted(entry)}")

    def set_test_overrides(self, test_id: str, **overrides: Any) -> None:
        """Merge keys into one test's override entry."""
        entry = _check_keys(overrides, f"per_test[{test_id!r}]")
        with self._lock:
            self._per_test = {**self._per_test, test_id: {**self._per_test.get(test_id, {}), **entry}}
        logger.info(f"Updated config overrides for test '{test_id}': {sorted(entry)}")

    def clear_test_overrides(self, test_id: str) -> None:
        with self._lock:
            self._per_test = {k: v for k, v in self._per_test.items() if k != test_id}
