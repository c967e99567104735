"""Splitsmith: Redis-backed multi-armed bandit (UCB1) split testing."""

from splitsmith.ab import (
    Experiment,
    LeastTriedStrategy,
    RandomStrategy,
    SelectionStrategy,
    UCB1Strategy,
    commit,
    commit_many,
    constant,
    expand,
    get_strategy,
    select,
    select_named,
    select_ordered,
    select_permutation,
    snapshot,
    snapshots,
)
from splitsmith.dx.errors import (
    AdministrativeRenameConflict,
    ConfigurationError,
    InvalidCommitValue,
    PermutationSpaceTooLarge,
    SplitsmithError,
    StoreUnavailable,
)
from splitsmith.io.ser import ConnectionSpec, FormReport, TestConfig, TestReport
from splitsmith.runtime.config import ConfigResolver

__version__ = "0.1.0"

__all__ = [
    "ConfigResolver",
    "ConnectionSpec",
    "TestConfig",
    "TestReport",
    "FormReport",
    "SelectionStrategy",
    "UCB1Strategy",
    "RandomStrategy",
    "LeastTriedStrategy",
    "get_strategy",
    "select",
    "select_named",
    "select_ordered",
    "select_permutation",
    "constant",
    "Experiment",
    "commit",
    "commit_many",
    "expand",
    "snapshot",
    "snapshots",
    "SplitsmithError",
    "ConfigurationError",
    "InvalidCommitValue",
    "StoreUnavailable",
    "PermutationSpaceTooLarge",
    "AdministrativeRenameConflict",
]
