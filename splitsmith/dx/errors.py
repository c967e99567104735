"""Exception types raised by the allocation engine."""

from typing import Any, List, Optional


class SplitsmithError(Exception):
    """Base class for all Splitsmith errors."""


class ConfigurationError(SplitsmithError, ValueError):
    """Invalid configuration entry (unknown key, bad value)."""


class InvalidCommitValue(SplitsmithError, ValueError):
    """Commit value outside [-1, 1]. Raised before any store mutation."""

    def __init__(self, value: Any, test_id: Optional[str] = None):
        self.value = value
        self.test_id = test_id
        where = f" for test '{test_id}'" if test_id else ""
        super().__init__(f"Commit value must be a number in [-1, 1]{where}, got {value!r}")


class StoreUnavailable(SplitsmithError):
    """The key-value store could not be reached or timed out."""

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        super().__init__(message or f"Store unavailable during '{operation}'")


class PermutationSpaceTooLarge(SplitsmithError, ValueError):
    """Permutation test would produce more composite forms than allowed."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(
            f"Permutation test would generate {size} forms (limit {limit}). "
            "Permute fewer leading forms with take_first_n."
        )


class AdministrativeRenameConflict(SplitsmithError):
    """
    Some keys could not be renamed because their destination already exists.

    The rename is not rolled back: ``renamed_keys`` lists the destination keys
    that did move, ``failed_keys`` the source keys that stayed put.
    """

    def __init__(self, failed_keys: List[str], renamed_keys: Optional[List[str]] = None):
        self.failed_keys = sorted(failed_keys)
        self.renamed_keys = sorted(renamed_keys or [])
        super().__init__(
            f"{len(self.failed_keys)} key(s) not renamed, destination exists: "
            + ", ".join(self.failed_keys)
        )
