"""Serialization models for connection specs, test configs, and reports."""

from typing import Iterator, List, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SESSION_TTL_MS = 2 * 60 * 60 * 1000  # 2 hours


class ConnectionSpec(BaseModel):
    """Where a test's state lives. Hashable, so it can key the store pool."""

    model_config = ConfigDict(frozen=True)

    backend: Literal["redis", "memory"] = Field(default="redis", description="Store backend")
    url: str = Field(default="redis://localhost:6379/0", description="Redis connection URL")
    key_prefix: str = Field(default="mab", min_length=1, description="Root namespace for all keys")
    timeout_ms: int = Field(default=1000, gt=0, description="Per-operation socket timeout")


class TestConfig(BaseModel):
    """Resolved configuration for one test id."""

    __test__ = False  # not a pytest test class

    model_config = ConfigDict(frozen=True)

    connection: ConnectionSpec = Field(default_factory=ConnectionSpec)
    ttl_millis: int = Field(
        default=DEFAULT_SESSION_TTL_MS,
        gt=0,
        description="Sticky-session TTL shared by the selection and commit guard",
    )
    count_duplicates: bool = Field(
        default=False,
        description="Count repeat views and repeat commits within one sticky session",
    )


class FormReport(BaseModel):
    """Aggregate counters and current UCB1 bound for one form."""

    form_id: str
    bound: float
    nprospects: int = 0
    score: float = 0.0


class TestReport(BaseModel):
    """Read-only snapshot of a test, forms ranked by bound (highest first)."""

    __test__ = False

    test_id: str
    total_prospects: int = 0
    total_score: float = 0.0
    forms: List[FormReport] = Field(default_factory=list)

    def ranked(self) -> Iterator[Tuple[str, float, Tuple[int, float]]]:
        """Yield ``(form_id, bound, (nprospects, score))`` in rank order."""
        for form in self.forms:
            yield form.form_id, form.bound, (form.nprospects, form.score)

    @property
    def leader(self):
        return self.forms[0].form_id if self.forms else None
