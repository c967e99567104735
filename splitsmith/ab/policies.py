"""Selection strategies: UCB1 bandit, uniform random, least tried."""

import math
import random
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Tuple

from splitsmith.ab.keys import nprospects_key, scores_key
from splitsmith.io.ser import TestConfig
from splitsmith.runtime.cache import MemoryCache
from splitsmith.store.adapters import store_for
from splitsmith.utils.logging import get_logger

logger = get_logger("scoring")

# Bound used while a test has seen at most one prospect, where ln(N) is
# zero or undefined. High enough that every form gets explored first.
UNTESTED_BOUND = 1000.0

DEFAULT_CACHE_TTL = 5.0


def ucb1_bound(score: float, nprospects: int, total_prospects: int) -> float:
    """
    UCB1 upper confidence bound for one form.

    bound = s/max(n,1) + sqrt(2*ln(N) / max(n,1))

    Args:
        score: Cumulative committed score s of the form
        nprospects: Prospect count n of the form
        total_prospects: Prospect count N summed over all forms of the test

    Returns:
        The bound, or UNTESTED_BOUND when N <= 1
    """
    if total_prospects <= 1:
        return UNTESTED_BOUND
    n = max(nprospects, 1)
    return score / n + math.sqrt(2.0 * math.log(total_prospects) / n)


def read_counters(config: TestConfig, test_id: str) -> Tuple[Dict[str, int], Dict[str, float]]:
    """Fetch ``(nprospects, scores)`` hashes for a test."""
    store = store_for(config.connection)
    nprospects = {form: int(count) for form, count in store.hgetall(nprospects_key(config, test_id)).items()}
    scores = {form: float(score) for form, score in store.hgetall(scores_key(config, test_id)).items()}
    return nprospects, scores


def _candidates(form_ids: Iterable[str]) -> List[str]:
    # Store hash fields come back as str
    candidates = [str(form) for form in form_ids]
    if not candidates:
        raise ValueError("No candidate forms provided")
    return candidates


class SelectionStrategy(ABC):
    """Abstract base class for form selection strategies."""

    name = "abstract"

    @abstractmethod
    def select(self, config: TestConfig, test_id: str, form_ids: Iterable[str]) -> str:
        """
        Select the leading form.

        Args:
            config: Resolved config for the test
            test_id: Test id
            form_ids: Candidate form ids, in tie-break order

        Returns:
            Selected form id
        """
        pass


class _CachedStrategy(SelectionStrategy):
    """Caches selections per (connection, test id, candidate set)."""

    def __init__(self, cache_ttl: float = DEFAULT_CACHE_TTL, cache: Optional[MemoryCache] = None):
        self.cache_ttl = cache_ttl
        self.cache = cache or MemoryCache(default_ttl=cache_ttl)

    def select(self, config: TestConfig, test_id: str, form_ids: Iterable[str]) -> str:
        candidates = _candidates(form_ids)
        if self.cache_ttl <= 0:
            return self._select_uncached(config, test_id, candidates)

        cache_key = (self.name, config.connection, test_id, tuple(sorted(candidates)))
        return self.cache.get_or_compute(
            cache_key,
            lambda: self._select_uncached(config, test_id, candidates),
            ttl=self.cache_ttl,
        )

    @abstractmethod
    def _select_uncached(self, config: TestConfig, test_id: str, candidates: List[str]) -> str:
        pass


class UCB1Strategy(_CachedStrategy):
    """Upper Confidence Bound (UCB1) multi-armed bandit strategy."""

    name = "ucb1"

    def bounds(self, config: TestConfig, test_id: str, form_ids: Iterable[str]) -> Dict[str, float]:
        """Compute every candidate's bound from one snapshot of the counters."""
        nprospects, scores = read_counters(config, test_id)
        total = sum(nprospects.values())
        return {
            form: ucb1_bound(scores.get(form, 0.0), nprospects.get(form, 0), total)
            for form in map(str, form_ids)
        }

    def score(self, config: TestConfig, test_id: str, form_id: str) -> float:
        """Current bound of a single form."""
        return self.bounds(config, test_id, [form_id])[str(form_id)]

    def _select_uncached(self, config: TestConfig, test_id: str, candidates: List[str]) -> str:
        bounds = self.bounds(config, test_id, candidates)
        # max() keeps the first of equal bounds, so ties follow candidate order
        leader = max(candidates, key=lambda form: bounds[form])
        logger.debug(f"UCB1 leader for '{test_id}' is '{leader}' (bounds: {bounds})")
        return leader


class LeastTriedStrategy(_CachedStrategy):
    """Picks the form with the fewest prospects."""

    name = "least_tried"

    def _select_uncached(self, config: TestConfig, test_id: str, candidates: List[str]) -> str:
        nprospects, _ = read_counters(config, test_id)
        return min(candidates, key=lambda form: nprospects.get(form, 0))


class RandomStrategy(SelectionStrategy):
    """Uniform random choice (plain A/B split)."""

    name = "random"

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._random = random.Random(seed)

    def select(self, config: TestConfig, test_id: str, form_ids: Iterable[str]) -> str:
        return self._random.choice(_candidates(form_ids))


def get_strategy(name: str, **kwargs) -> SelectionStrategy:
    """
    Create a strategy by name.

    Args:
        name: "ucb1" (or "ucb"), "random" (or "uniform"), "least_tried"
        **kwargs: Passed to the strategy constructor

    Returns:
        SelectionStrategy instance
    """
    name_lower = name.lower()

    if name_lower in ("ucb", "ucb1"):
        return UCB1Strategy(**kwargs)
    elif name_lower in ("random", "uniform"):
        return RandomStrategy(**kwargs)
    elif name_lower in ("least_tried", "least-tried", "leasttried"):
        return LeastTriedStrategy(**kwargs)
    else:
        raise ValueError(
            f"Unknown strategy: {name}. "
            "Supported: 'ucb1' (or 'ucb'), 'random' (or 'uniform'), 'least_tried'"
        )
