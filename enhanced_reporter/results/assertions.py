"""Flatten a reported step tree into assertion outcomes."""

import re
from typing import Iterable

from enhanced_reporter.host.models import ExecutionStep

from .models import AssertionOutcome

ASSERTION_CATEGORY = "expect"

# Not every host sets the category, so the call text is checked as well
ASSERTION_MARKER = "expect("

_PREFIX_RE = re.compile(r"^Expect ")
_WHITESPACE_RE = re.compile(r"\s+")


def is_assertion(step: ExecutionStep) -> bool:
    """Check whether a step represents an assertion call."""
    return step.category == ASSERTION_CATEGORY or ASSERTION_MARKER in (step.title or "")


def clean_assertion_name(title: str) -> str:
    """Make an assertion step title readable.

    Drops the leading ``Expect`` boilerplate, removes double quotes and
    collapses whitespace runs.

    Args:
        title: Raw step title.

    Returns:
        Cleaned description, e.g. ``toHaveTitle`` from ``Expect "toHaveTitle"``.
    """
    name = _PREFIX_RE.sub("", title or "")
    name = name.replace('"', "")
    return _WHITESPACE_RE.sub(" ", name).strip()


def extract_assertions(steps: Iterable[ExecutionStep]) -> list[AssertionOutcome]:
    """Collect assertions from a step tree in depth-first pre-order.

    Children are always visited, so assertions nested under grouping steps
    (``test.step``, hooks) are found. Duplicates are kept.

    Args:
        steps: Top-level steps of one test attempt.

    Returns:
        Assertion outcomes in traversal order; empty for no steps.
    """
    assertions: list[AssertionOutcome] = []

    # Explicit stack; step trees may be deeper than the recursion limit
    stack = list(reversed(list(steps or [])))
    while stack:
        step = stack.pop()
        if is_assertion(step):
            assertions.append(
                AssertionOutcome(
                    description=clean_assertion_name(step.title),
                    passed=not step.failed,
                    duration=step.duration or 0,
                )
            )
        stack.extend(reversed(step.steps or []))

    return assertions
