"""A/B testing system modules."""

from splitsmith.ab.experiment import Experiment
from splitsmith.ab.ledger import commit, commit_many, validate_commit_value
from splitsmith.ab.metrics import snapshot, snapshots
from splitsmith.ab.multivariate import MAX_PERMUTATIONS, expand, permutation_count
from splitsmith.ab.policies import (
    UNTESTED_BOUND,
    LeastTriedStrategy,
    RandomStrategy,
    SelectionStrategy,
    UCB1Strategy,
    get_strategy,
    ucb1_bound,
)
from splitsmith.ab.selection import (
    constant,
    select,
    select_named,
    select_ordered,
    select_permutation,
)

__all__ = [
    # Strategies
    "SelectionStrategy",
    "UCB1Strategy",
    "RandomStrategy",
    "LeastTriedStrategy",
    "get_strategy",
    "ucb1_bound",
    "UNTESTED_BOUND",
    # Selection
    "select",
    "select_named",
    "select_ordered",
    "select_permutation",
    "constant",
    "Experiment",
    # Ledger
    "commit",
    "commit_many",
    "validate_commit_value",
    # Multivariate
    "expand",
    "permutation_count",
    "MAX_PERMUTATIONS",
    # Reporting
    "snapshot",
    "snapshots",
]
