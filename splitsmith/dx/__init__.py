"""Developer-facing error types."""

from splitsmith.dx.errors import (
    AdministrativeRenameConflict,
    ConfigurationError,
    InvalidCommitValue,
    PermutationSpaceTooLarge,
    SplitsmithError,
    StoreUnavailable,
)

__all__ = [
    "SplitsmithError",
    "ConfigurationError",
    "InvalidCommitValue",
    "StoreUnavailable",
    "PermutationSpaceTooLarge",
    "AdministrativeRenameConflict",
]
