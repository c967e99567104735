"""Sticky form selection and selection helpers."""

from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from splitsmith.ab.keys import commit_guard_key, nprospects_key, selection_key
from splitsmith.ab.multivariate import expand
from splitsmith.ab.policies import SelectionStrategy
from splitsmith.io.ser import TestConfig
from splitsmith.store.adapters import store_for
from splitsmith.utils.logging import get_logger

logger = get_logger("selection")

FormProducer = Callable[[], Any]


def _leader(config: TestConfig, strategy: SelectionStrategy, test_id: str, form_ids: Sequence[str]) -> str:
    if len(form_ids) == 1:
        return form_ids[0]
    return strategy.select(config, test_id, form_ids)


def select(
    config: TestConfig,
    strategy: SelectionStrategy,
    participant_id: Optional[str],
    test_id: str,
    form_producers: Mapping[str, FormProducer],
) -> Any:
    """
    Select a form for a participant and return the chosen form's value.

    A live sticky selection naming one of the offered forms is always
    honoured and its session window (selection and commit guard) slides
    forward. Otherwise the strategy picks a leader, which becomes the new
    sticky selection and counts as a prospect. Only the chosen producer is
    called, once.

    Args:
        config: Resolved config for the test
        strategy: Strategy used when no sticky selection applies
        participant_id: Participant id, or None to exclude the caller from
            the test (no state is read per participant or written)
        test_id: Test id
        form_producers: Form id -> zero-argument callable producing the form.
            Ids are stored and compared as str

    Returns:
        The chosen producer's value, or None if no forms were offered

    Raises:
        StoreUnavailable: The store could not be reached; no form is returned
    """
    form_producers = {str(form_id): producer for form_id, producer in form_producers.items()}
    form_ids = list(form_producers)
    if not form_ids:
        return None

    if participant_id is None:
        chosen = _leader(config, strategy, test_id, form_ids)
        return form_producers[chosen]()

    store = store_for(config.connection)
    ttl_ms = config.ttl_millis
    sel_key = selection_key(config, test_id, participant_id)
    guard_key = commit_guard_key(config, test_id, participant_id)

    prior = store.get(sel_key)
    if prior is not None and prior in form_producers:
        chosen = prior
        store.expire(sel_key, ttl_ms)
        store.expire(guard_key, ttl_ms)
        if config.count_duplicates:
            store.hincrby(nprospects_key(config, test_id), chosen, 1)
        logger.debug(f"Sticky selection '{chosen}' kept for '{participant_id}' in '{test_id}'")
    else:
        chosen = _leader(config, strategy, test_id, form_ids)
        store.set(sel_key, chosen, ttl_ms=ttl_ms)
        # A guard left from a previous allocation must not block this session's commit
        store.delete(guard_key)
        store.hincrby(nprospects_key(config, test_id), chosen, 1)
        logger.debug(
            f"Allocated '{chosen}' to '{participant_id}' in '{test_id}'"
            + (f" (replacing '{prior}')" if prior is not None else "")
        )

    return form_producers[chosen]()


def constant(value: Any) -> FormProducer:
    """Zero-argument producer returning a fixed value."""
    return lambda: value


def select_named(
    config: TestConfig,
    strategy: SelectionStrategy,
    participant_id: Optional[str],
    test_id: str,
    **forms: Any,
) -> Any:
    """
    Select among constant forms given as keyword arguments.

        select_named(config, strategy, pid, "landing.buttons.signup",
                     signup="Signup!", join="Join!", join_now="Join now!")
    """
    return select(config, strategy, participant_id, test_id, {name: constant(value) for name, value in forms.items()})


def select_ordered(
    config: TestConfig,
    strategy: SelectionStrategy,
    participant_id: Optional[str],
    test_id: str,
    values: Sequence[Any],
) -> Any:
    """Select among constant forms named by their position ("0", "1", ...)."""
    return select(
        config, strategy, participant_id, test_id,
        {str(i): constant(value) for i, value in enumerate(values)},
    )


def select_permutation(
    config: TestConfig,
    strategy: SelectionStrategy,
    participant_id: Optional[str],
    test_id: str,
    base_forms: Sequence[Any],
    take_first_n: Optional[int] = None,
) -> list:
    """Select one ordering of ``base_forms`` from the permutation test space."""
    composites = expand(base_forms, take_first_n)
    return select(
        config, strategy, participant_id, test_id,
        {form_id: constant(form) for form_id, form in composites.items()},
    )
