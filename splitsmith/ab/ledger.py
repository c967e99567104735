"""Commit ledger: credit outcome values to participants' selected forms."""

import math
import numbers
from typing import Any, List, Optional

from splitsmith.ab.keys import commit_guard_key, scores_key, selection_key
from splitsmith.dx.errors import InvalidCommitValue
from splitsmith.io.ser import TestConfig
from splitsmith.runtime.config import ConfigResolver
from splitsmith.store.adapters import store_for
from splitsmith.utils.logging import get_logger

logger = get_logger("ledger")


def validate_commit_value(value: Any, test_id: Optional[str] = None) -> float:
    """
    Return ``value`` as a float, or raise InvalidCommitValue unless it is in [-1, 1].

    Any number that converts to float is accepted (int, float, Decimal,
    Fraction). Booleans, complex numbers and NaN are rejected.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Number):
        raise InvalidCommitValue(value, test_id)
    try:
        converted = float(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidCommitValue(value, test_id) from e
    if math.isnan(converted) or not -1.0 <= converted <= 1.0:
        raise InvalidCommitValue(value, test_id)
    return converted


def commit(
    config: TestConfig,
    participant_id: Optional[str],
    test_id: str,
    value: float,
) -> Optional[str]:
    """
    Add ``value`` to the score of the participant's currently selected form.

    Nothing happens when the participant is absent, has no live selection,
    or already committed in this sticky session (unless the config counts
    duplicates). The guard check and the guard write are separate store
    calls, so concurrent duplicate commits can occasionally both count.

        # On signup button click:
        commit(config, pid, "landing.buttons.signup", 1)

    Args:
        config: Resolved config for the test
        participant_id: Participant id, or None
        test_id: Test id
        value: Outcome value in [-1, 1]

    Returns:
        The credited form id, or None if nothing was recorded

    Raises:
        InvalidCommitValue: Before any store access, for out-of-range values
        StoreUnavailable: The store could not be reached
    """
    value = validate_commit_value(value, test_id)
    if participant_id is None:
        return None

    store = store_for(config.connection)
    guard_key = commit_guard_key(config, test_id, participant_id)

    if not config.count_duplicates and store.exists(guard_key):
        logger.debug(f"Duplicate commit ignored for '{participant_id}' in '{test_id}'")
        return None

    selected = store.get(selection_key(config, test_id, participant_id))
    if selected is None:
        logger.debug(f"No selection to credit for '{participant_id}' in '{test_id}'")
        return None

    store.hincrbyfloat(scores_key(config, test_id), selected, value)
    store.set(guard_key, "1", ttl_ms=config.ttl_millis)
    logger.debug(f"Committed {value} to '{selected}' in '{test_id}' for '{participant_id}'")
    return selected


def commit_many(resolver: ConfigResolver, participant_id: Optional[str], *test_values: Any) -> List[Optional[str]]:
    """
    Commit several ``test_id, value`` pairs given as a flat argument list.

        commit_many(resolver, pid,
                    "landing.buttons.signup", 1,
                    "landing.title", 1)

    Pairs are committed independently, in argument order, each with its own
    resolved config. A bad value fails its own pair; earlier pairs stay
    committed.

    Returns:
        The credited form id (or None) per pair
    """
    if len(test_values) % 2 != 0:
        raise ValueError("commit_many expects test_id, value pairs")

    results = []
    for i in range(0, len(test_values), 2):
        test_id, value = test_values[i], test_values[i + 1]
        results.append(commit(resolver.resolve(test_id), participant_id, test_id, value))
    return results
