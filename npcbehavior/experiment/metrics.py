"""Experiment metrics: correctness, response latency and text reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from npcbehavior.experiment.scenario import ExpectedState


@dataclass
class TickRecord:
    """What happened in one tick."""

    tick: int
    state: str
    threat_level: float = 0.0
    event_arrived: str = ""
    transitioned: bool = False


@dataclass
class BBCheckResult:
    """Outcome of one board checkpoint."""

    key: str
    expected: str
    actual: str
    passed: bool


@dataclass
class ModeResult:
    """Results of running one architecture mode through a scenario."""

    mode_name: str
    records: list[TickRecord] = field(default_factory=list)
    total_checks: int = 0
    correct_checks: int = 0
    correctness: float = 0.0
    response_ticks: list[int] = field(default_factory=list)
    avg_response: float = 0.0
    max_response: int = 0
    preemption_ok: bool = False
    arbitration_ok: bool = False
    recovery_ok: bool = False
    bb_check_results: list[BBCheckResult] = field(default_factory=list)

    def calc_metrics(self, expected: Iterable[ExpectedState]) -> None:
        """Compute state correctness and response latency from the records."""
        expected = list(expected)
        self.total_checks = len(expected)
        self.correct_checks = sum(
            1
            for exp in expected
            if 0 <= exp.at_tick < len(self.records)
            and self.records[exp.at_tick].state == exp.expected_state
        )
        if self.total_checks > 0:
            self.correctness = self.correct_checks / self.total_checks * 100

        self.response_ticks = response_ticks(self.records)
        if self.response_ticks:
            self.max_response = max(self.max_response, max(self.response_ticks))
            self.avg_response = sum(self.response_ticks) / len(self.response_ticks)


def response_ticks(records: Sequence[TickRecord]) -> list[int]:
    """For every tick an event arrived, the ticks until the next transition (or the run's end)."""
    last = len(records) - 1
    return [
        next((j - i for j in range(i, len(records)) if records[j].transitioned), last - i)
        for i, rec in enumerate(records)
        if rec.event_arrived
    ]


def _verdict(ok: bool) -> str:
    return "PASS" if ok else "FAIL"


@dataclass
class ComparisonReport:
    """Results of several modes over one scenario."""

    scenario: str
    results: list[ModeResult] = field(default_factory=list)

    def get(self, name: str) -> ModeResult | None:
        """The result for the named mode, or None."""
        return next((r for r in self.results if r.mode_name == name), None)

    def format_table(self) -> str:
        """A Markdown comparison table; empty when there are no results."""
        if not self.results:
            return ""
        parts = [f"\n=== Comparison: {self.scenario} ===\n\n", "| Metric              |"]
        parts += [f" {r.mode_name:<12} |" for r in self.results]
        parts.append("\n|---------------------|")
        parts += ["--------------|" for _ in self.results]

        parts.append("\n| M1 Correctness      |")
        parts += [f" {r.correctness:5.1f}%       |" for r in self.results]

        parts.append("\n| M5 Preemption       |")
        parts += [f" {_verdict(r.preemption_ok):<12} |" for r in self.results]
        parts.append("\n| M5 Recovery         |")
        parts += [f" {_verdict(r.recovery_ok):<12} |" for r in self.results]

        for i, check in enumerate(self.results[0].bb_check_results):
            parts.append(f"\n| BB {check.key:<17} |")
            parts += [
                f" {_verdict(r.bb_check_results[i].passed):<12} |"
                for r in self.results
                if i < len(r.bb_check_results)
            ]
        parts.append("\n")
        return "".join(parts)


def format_mode_detail(mode: ModeResult) -> str:
    """A per-tick log of one mode's state changes and events, with its correctness."""
    lines = [f"\n=== {mode.mode_name} ===\n"]
    previous = ""
    for rec in mode.records:
        if rec.event_arrived or rec.state != previous:
            line = f"  Tick {rec.tick:3d}: {rec.state:<10} threat={rec.threat_level:.1f}"
            if rec.event_arrived:
                line += f"  [{rec.event_arrived}]"
            if rec.transitioned:
                line += f"  ({previous}→{rec.state})"
            lines.append(line + "\n")
        previous = rec.state
    lines.append(
        f"  correct={mode.correct_checks}/{mode.total_checks} ({mode.correctness:.1f}%)\n"
    )
    return "".join(lines)