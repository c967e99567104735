"""I/O modules for serialization and MLflow integration."""

from splitsmith.io.ser import (
    DEFAULT_SESSION_TTL_MS,
    ConnectionSpec,
    FormReport,
    TestConfig,
    TestReport,
)

__all__ = [
    "DEFAULT_SESSION_TTL_MS",
    "ConnectionSpec",
    "TestConfig",
    "FormReport",
    "TestReport",
]
