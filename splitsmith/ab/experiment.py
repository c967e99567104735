"""Bound handle for one test: resolver + test id + strategy."""

from typing import Any, Mapping, Optional

from splitsmith.ab.ledger import commit
from splitsmith.ab.metrics import snapshot
from splitsmith.ab.policies import SelectionStrategy, UCB1Strategy
from splitsmith.ab.selection import FormProducer, select, select_named
from splitsmith.io.ser import TestConfig, TestReport
from splitsmith.runtime.config import ConfigResolver


class Experiment:
    """
    Convenience wrapper around select/commit/snapshot for a single test.

    Config is resolved on every call, so runtime changes made through the
    resolver take effect immediately.

        signup = Experiment(resolver, "landing.buttons.signup")
        label = signup.select_named(pid, signup="Signup!", join="Join!")
        ...
        signup.commit(pid, 1)
    """

    def __init__(
        self,
        resolver: ConfigResolver,
        test_id: str,
        strategy: Optional[SelectionStrategy] = None,
    ):
        self.resolver = resolver
        self.test_id = test_id
        self.strategy = strategy or UCB1Strategy()

    @property
    def config(self) -> TestConfig:
        return self.resolver.resolve(self.test_id)

    def select(self, participant_id: Optional[str], form_producers: Mapping[str, FormProducer]) -> Any:
        return select(self.config, self.strategy, participant_id, self.test_id, form_producers)

    def select_named(self, participant_id: Optional[str], **forms: Any) -> Any:
        return select_named(self.config, self.strategy, participant_id, self.test_id, **forms)

    def commit(self, participant_id: Optional[str], value: float) -> Optional[str]:
        return commit(self.config, participant_id, self.test_id, value)

    def report(self) -> TestReport:
        return snapshot(self.config, self.test_id)
