"""Read-only test snapshots for reporting layers."""

from typing import List

from splitsmith.ab.policies import read_counters, ucb1_bound
from splitsmith.io.ser import FormReport, TestConfig, TestReport
from splitsmith.runtime.config import ConfigResolver


def snapshot(config: TestConfig, test_id: str) -> TestReport:
    """
    Snapshot a test's counters with forms ranked by current UCB1 bound.

    Reads the store directly, bypassing the selection cache.
    """
    nprospects, scores = read_counters(config, test_id)
    total_prospects = sum(nprospects.values())

    forms = [
        FormReport(
            form_id=form_id,
            bound=ucb1_bound(scores.get(form_id, 0.0), nprospects.get(form_id, 0), total_prospects),
            nprospects=nprospects.get(form_id, 0),
            score=scores.get(form_id, 0.0),
        )
        for form_id in sorted(set(nprospects) | set(scores))
    ]
    forms.sort(key=lambda form: form.bound, reverse=True)

    return TestReport(
        test_id=test_id,
        total_prospects=total_prospects,
        total_score=sum(scores.values()),
        forms=forms,
    )


def snapshots(resolver: ConfigResolver, *test_ids: str) -> List[TestReport]:
    """Snapshot several tests, each with its own resolved config."""
    return [snapshot(resolver.resolve(test_id), test_id) for test_id in test_ids]
