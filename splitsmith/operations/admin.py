"""Administrative operations over a test's stored state."""

from typing import List, Set

from splitsmith.ab.keys import namespace_prefix
from splitsmith.dx.errors import AdministrativeRenameConflict
from splitsmith.io.ser import TestConfig
from splitsmith.store.adapters import store_for
from splitsmith.utils.logging import get_logger, log_warning

logger = get_logger("admin")


def list_keys(config: TestConfig, test_id: str) -> Set[str]:
    """All store keys in the namespace of ``test_id``."""
    return store_for(config.connection).keys(namespace_prefix(config, test_id))


def delete(config: TestConfig, test_id: str) -> int:
    """
    Delete every key of a test: counters, scores, selections and guards.

    Returns:
        Number of keys deleted
    """
    keys = list_keys(config, test_id)
    if not keys:
        return 0
    deleted = store_for(config.connection).delete(*sorted(keys))
    logger.info(f"Deleted {deleted} key(s) of test '{test_id}'")
    return deleted


def rename(config: TestConfig, old_test_id: str, new_test_id: str) -> List[str]:
    """
    Move every key of ``old_test_id`` into the namespace of ``new_test_id``.

    Each key is renamed only if its destination does not exist. All keys are
    attempted; nothing is rolled back.

    Returns:
        The destination keys that were written

    Raises:
        AdministrativeRenameConflict: Some destinations already existed. The
            error lists the source keys left behind and the keys that moved.
    """
    store = store_for(config.connection)
    old_prefix = namespace_prefix(config, old_test_id)
    new_prefix = namespace_prefix(config, new_test_id)

    renamed: List[str] = []
    failed: List[str] = []
    for key in sorted(store.keys(old_prefix)):
        destination = new_prefix + key[len(old_prefix):]
        try:
            moved = store.renamenx(key, destination)
        except KeyError:
            # Expired (sticky selections, guards) since enumeration
            logger.debug(f"Key '{key}' vanished before rename")
            continue
        if moved:
            renamed.append(destination)
        else:
            failed.append(key)

    if failed:
        log_warning(
            logger,
            f"Rename of test '{old_test_id}' to '{new_test_id}' left {len(failed)} key(s) behind",
            {"failed_keys": failed},
        )
        raise AdministrativeRenameConflict(failed, renamed)

    logger.info(f"Renamed test '{old_test_id}' to '{new_test_id}' ({len(renamed)} key(s))")
    return renamed
