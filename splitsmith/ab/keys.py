"""Persisted key layout.

    <prefix>:<test-id>:nprospects                   -> hash, {form-id: prospect count}
    <prefix>:<test-id>:scores                       -> hash, {form-id: cumulative score}
    <prefix>:<test-id>:<participant-id>:selection   -> string, form-id (session TTL)
    <prefix>:<test-id>:<participant-id>:committed?  -> flag (session TTL)
"""

from splitsmith.io.ser import TestConfig


def namespace_prefix(config: TestConfig, test_id: str) -> str:
    """Prefix shared by every key belonging to ``test_id``."""
    return f"{config.connection.key_prefix}:{test_id}:"


def nprospects_key(config: TestConfig, test_id: str) -> str:
    return namespace_prefix(config, test_id) + "nprospects"


def scores_key(config: TestConfig, test_id: str) -> str:
    return namespace_prefix(config, test_id) + "scores"


def selection_key(config: TestConfig, test_id: str, participant_id: str) -> str:
    return namespace_prefix(config, test_id) + f"{participant_id}:selection"


def commit_guard_key(config: TestConfig, test_id: str, participant_id: str) -> str:
    return namespace_prefix(config, test_id) + f"{participant_id}:committed?"

