"""Fixed-weight checklists.

A checklist is an immutable tuple of named checks. Each check awards
either its full weight or nothing (Check), or the points of the first
tier whose predicate holds (TieredCheck). The weights of a checklist sum
to the axis ceiling, so a score can never exceed it.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass, field

from engine.document import PageDocument

Predicate = Callable[[PageDocument], bool]


@dataclass(frozen=True)
class ScoringOptions:
    """Options for the enhanced scorers.

    is_website: website profile (baseline + advanced checks). When False
        the blog profile runs baseline checks only, out of 100.
    strict_mode: tighten title and description length bounds.
    """

    is_website: bool = True
    strict_mode: bool = False


DEFAULT_OPTIONS = ScoringOptions()


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one check."""

    key: str
    label: str
    points: int
    max_points: int
    tip: str = ""
    steps: tuple[str, ...] = ()

    @property
    def passed(self) -> bool:
        return self.points >= self.max_points

    @property
    def missing_points(self) -> int:
        return self.max_points - self.points

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "label": self.label,
            "points": self.points,
            "maxPoints": self.max_points,
        }


@dataclass(frozen=True)
class Check:
    """All-or-nothing check."""

    key: str
    label: str
    weight: int
    predicate: Predicate
    tip: str = ""
    steps: tuple[str, ...] = ()

    def evaluate(self, document: PageDocument) -> CheckResult:
        points = self.weight if self.predicate(document) else 0
        return CheckResult(self.key, self.label, points, self.weight, self.tip, self.steps)


@dataclass(frozen=True)
class TieredCheck:
    """Graded check: first satisfied tier wins, tiers ordered high to low."""

    key: str
    label: str
    tiers: tuple[tuple[int, Predicate], ...]
    tip: str = ""
    steps: tuple[str, ...] = ()

    @property
    def weight(self) -> int:
        return max(points for points, _ in self.tiers)

    def evaluate(self, document: PageDocument) -> CheckResult:
        points = 0
        for tier_points, predicate in self.tiers:
            if predicate(document):
                points = tier_points
                break
        return CheckResult(self.key, self.label, points, self.weight, self.tip, self.steps)


AnyCheck = Check | TieredCheck


@dataclass
class ChecklistResult:
    """Score of one axis with per-check breakdown."""

    axis: str
    score: int
    max_score: int
    results: list[CheckResult] = field(default_factory=list)

    @property
    def normalized(self) -> int:
        return normalize_score(self.score, self.max_score)

    def failed(self) -> list[CheckResult]:
        """Checks that did not award full points, largest gap first."""
        misses = [r for r in self.results if not r.passed]
        return sorted(misses, key=lambda r: r.missing_points, reverse=True)

    def passed_keys(self) -> set[str]:
        return {r.key for r in self.results if r.passed}

    def show_the_math(self) -> str:
        """Human-readable breakdown of the score."""
        lines = [f"{self.axis.upper()}: {self.score}/{self.max_score} ({self.normalized}/100)"]
        for result in self.results:
            marker = "+" if result.passed else ("~" if result.points else "-")
            lines.append(f"  {marker} {result.label}: {result.points}/{result.max_points}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {
            "axis": self.axis,
            "score": self.score,
            "maxScore": self.max_score,
            "normalized": self.normalized,
            "checks": [r.to_dict() for r in self.results],
        }


def checklist_weight(checks: tuple[AnyCheck, ...]) -> int:
    return sum(check.weight for check in checks)


def select_checks(
    baseline: tuple[AnyCheck, ...],
    advanced: tuple[AnyCheck, ...],
    options: ScoringOptions,
    overrides: dict[str, AnyCheck] | None = None,
) -> tuple[AnyCheck, ...]:
    """Active checks for a profile, with strict-mode replacements applied."""
    checks = baseline + advanced if options.is_website else baseline
    if options.strict_mode and overrides:
        checks = tuple(overrides.get(check.key, check) for check in checks)
    return checks


def evaluate_checklist(
    axis: str,
    checks: tuple[AnyCheck, ...],
    document: PageDocument,
    ceiling: int,
) -> ChecklistResult:
    """Run every check and clamp the total to [0, ceiling]."""
    results = [check.evaluate(document) for check in checks]
    total = sum(r.points for r in results)
    return ChecklistResult(
        axis=axis,
        score=max(0, min(ceiling, total)),
        max_score=min(ceiling, checklist_weight(checks)),
        results=results,
    )


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def normalize_score(score: float, max_score: float) -> int:
    """Rescale a raw score to 0-100 (half-up rounding)."""
    if max_score <= 0:
        return 0
    return max(0, min(100, round_half_up(score / max_score * 100)))
