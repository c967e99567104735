"""Tests for administrative delete and rename."""

import pytest

from splitsmith.ab.keys import nprospects_key, scores_key, selection_key
from splitsmith.ab.ledger import commit
from splitsmith.ab.policies import UCB1Strategy
from splitsmith.ab.selection import select_named
from splitsmith.dx.errors import AdministrativeRenameConflict
from splitsmith.operations.admin import delete, list_keys, rename

SIGNUP = "landing.buttons.signup"


def run_signup(config, *participants):
    strategy = UCB1Strategy(cache_ttl=0)
    for pid in participants:
        select_named(config, strategy, pid, SIGNUP, signup="Signup!", join="Join!")
        commit(config, pid, SIGNUP, 1)


class TestListAndDelete:
    """Test listing and deleting a test's keys."""

    def test_list_keys(self, config, store):
        """Every key of the test is listed; other tests are not."""
        run_signup(config, "p1")
        run_signup(config, "p9")
        store.hincrby(nprospects_key(config, "landing.title"), "long", 1)

        prefix = f"{config.connection.key_prefix}:{SIGNUP}:"
        assert list_keys(config, SIGNUP) == {
            prefix + "nprospects",
            prefix + "scores",
            prefix + "p1:selection",
            prefix + "p1:committed?",
            prefix + "p9:selection",
            prefix + "p9:committed?",
        }

    def test_delete_clears_test(self, config, store):
        """After delete the test has no keys and the next selection starts fresh."""
        run_signup(config, "p1", "p2")
        store.hincrby(nprospects_key(config, "landing.title"), "long", 1)

        assert delete(config, SIGNUP) == 6
        assert list_keys(config, SIGNUP) == set()
        assert store.hgetall(nprospects_key(config, "landing.title")) == {"long": "1"}

        run_signup(config, "p1")
        assert store.hgetall(nprospects_key(config, SIGNUP)) == {"signup": "1"}

    def test_delete_unknown_test(self, config, store):
        """Deleting a test with no data removes nothing."""
        assert delete(config, "nothing.here") == 0

    def test_test_id_with_glob_characters(self, config, store):
        """Glob characters in test ids match literally."""
        store.hincrby(nprospects_key(config, "promo[1]"), "A", 1)
        store.hincrby(nprospects_key(config, "promo1"), "A", 1)

        assert delete(config, "promo[1]") == 1
        assert store.exists(nprospects_key(config, "promo1"))


class TestRename:
    """Test moving a test to a new id."""

    def test_rename_moves_everything(self, config, store):
        """All keys move and keep their contents and TTLs."""
        run_signup(config, "p1")

        renamed = rename(config, SIGNUP, "landing.buttons.join")

        assert len(renamed) == 4
        assert list_keys(config, SIGNUP) == set()
        assert store.hgetall(nprospects_key(config, "landing.buttons.join")) == {"signup": "1"}
        assert float(store.hget(scores_key(config, "landing.buttons.join"), "signup")) == 1.0
        assert store.get(selection_key(config, "landing.buttons.join", "p1")) == "signup"

    def test_rename_conflict(self, config, store):
        """Existing destinations are reported; the rest still move."""
        run_signup(config, "p1")
        store.hincrby(nprospects_key(config, "landing.buttons.join"), "other", 5)

        with pytest.raises(AdministrativeRenameConflict) as exc_info:
            rename(config, SIGNUP, "landing.buttons.join")

        error = exc_info.value
        assert error.failed_keys == [nprospects_key(config, SIGNUP)]
        assert len(error.renamed_keys) == 3
        assert list_keys(config, SIGNUP) == {nprospects_key(config, SIGNUP)}
        assert store.hgetall(nprospects_key(config, "landing.buttons.join")) == {"other": "5"}
        assert store.get(selection_key(config, "landing.buttons.join", "p1")) == "signup"
