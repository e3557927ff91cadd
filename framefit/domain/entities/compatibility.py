from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationIssue:
    """One scored compatibility rule that fired.

    Hard issues make an image incompatible regardless of its score.
    """

    code: str
    message: str
    penalty: int
    hard: bool
    recommendation: str | None = None


@dataclass(frozen=True)
class CompatibilityReport:
    score: int
    is_compatible: bool
    issues: tuple[str, ...]
    recommendations: tuple[str, ...]
    findings: tuple[ValidationIssue, ...] = ()
