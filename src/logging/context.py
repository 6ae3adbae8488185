# src/logging/context.py
"""Logging context: which submission, which pair and which step a record belongs to.

Normalization runs set the submission (``project_id``); pairwise comparisons
set ``comparison`` as ``"a<->b"``. Worker threads started with
``asyncio.to_thread`` inherit a copy, so their changes stay local.
"""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict, dataclass

_project_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "plagscan_project_id", default=None
)
_comparison: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "plagscan_comparison", default=None
)
_step: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "plagscan_step", default=None
)


@dataclass(frozen=True)
class LogContext:
    """Snapshot of the logging context."""

    project_id: str | None = None
    comparison: str | None = None
    step: str | None = None

    def as_dict(self) -> dict[str, str]:
        """Set fields only."""
        return {k: v for k, v in asdict(self).items() if v is not None}


def get_context() -> LogContext:
    return LogContext(
        project_id=_project_id.get(),
        comparison=_comparison.get(),
        step=_step.get(),
    )


@contextmanager
def project_scope(project_id: str, step: str | None = None) -> Iterator[None]:
    """Mark the current submission for the duration of a block, then restore."""
    with _scoped((_project_id, project_id), (_step, step)):
        yield


@contextmanager
def comparison_scope(project_a: str, project_b: str) -> Iterator[None]:
    """Mark the current project pair (step "compare") for a block, then restore."""
    with _scoped((_comparison, _pair_label(project_a, project_b)), (_step, "compare")):
        yield


def _pair_label(project_a: str, project_b: str) -> str:
    return f"{project_a}<->{project_b}"


@contextmanager
def _scoped(*assignments: tuple[contextvars.ContextVar[str | None], str | None]) -> Iterator[None]:
    tokens = [(var, var.set(value)) for var, value in assignments]
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)
