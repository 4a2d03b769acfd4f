"""Experiment scenarios: scripted events and the states and board values expected from them."""

from __future__ import annotations

from dataclasses import dataclass, field

from npcbehavior.event import Vec3


@dataclass(frozen=True)
class ScenarioEvent:
    """An event injected at a given tick."""

    at_tick: int
    type: str
    position: Vec3 = Vec3()
    severity: float = 0.0


@dataclass(frozen=True)
class ExpectedState:
    """The state the NPC should be in at a given tick."""

    at_tick: int
    expected_state: str


@dataclass(frozen=True)
class BBCheckpoint:
    """A board value to check at a given tick; non_empty passes on any non-empty value."""

    at_tick: int
    key: str
    expected: str = ""
    non_empty: bool = False


@dataclass
class Scenario:
    """A complete experiment scenario."""

    name: str
    npc_type: str
    total_ticks: int
    delta_time: float
    npc_position: Vec3 = Vec3()
    events: list[ScenarioEvent] = field(default_factory=list)
    expected: list[ExpectedState] = field(default_factory=list)
    bb_checkpoints: list[BBCheckpoint] = field(default_factory=list)


def scenario_distance_trap() -> Scenario:
    """A loud but distant gunshot: only distance-aware decisions stay merely Alarmed."""
    return Scenario(
        name="distance_trap",
        npc_type="civilian",
        total_ticks=30,
        delta_time=0.1,
        events=[ScenarioEvent(at_tick=3, type="gunshot", position=Vec3(x=290, z=0), severity=90)],
        expected=[
            ExpectedState(at_tick=0, expected_state="Idle"),
            ExpectedState(at_tick=8, expected_state="Alarmed"),
        ],
    )


def scenario_multi_step_behavior() -> Scenario:
    """A nearby explosion that needs a multi-step flee action."""
    return Scenario(
        name="multi_step_behavior",
        npc_type="civilian",
        total_ticks=30,
        delta_time=0.1,
        events=[ScenarioEvent(at_tick=3, type="explosion", position=Vec3(x=50, z=0), severity=80)],
        expected=[
            ExpectedState(at_tick=0, expected_state="Idle"),
            ExpectedState(at_tick=8, expected_state="Flee"),
        ],
        bb_checkpoints=[BBCheckpoint(at_tick=10, key="current_action", expected="run_away")],
    )


def scenario_state_lifecycle() -> Scenario:
    """A shout then a gunshot, exercising state enter and exit hooks."""
    return Scenario(
        name="state_lifecycle",
        npc_type="civilian",
        total_ticks=80,
        delta_time=0.5,
        events=[
            ScenarioEvent(at_tick=3, type="shout", position=Vec3(x=30, z=0), severity=30),
            ScenarioEvent(at_tick=15, type="gunshot", position=Vec3(x=30, z=0), severity=90),
        ],
        expected=[
            ExpectedState(at_tick=0, expected_state="Idle"),
            ExpectedState(at_tick=6, expected_state="Alarmed"),
            ExpectedState(at_tick=20, expected_state="Flee"),
        ],
        bb_checkpoints=[
            BBCheckpoint(at_tick=8, key="alert_start_tick", non_empty=True),
            BBCheckpoint(at_tick=22, key="exit_cleanup_done", expected="alarmed_cleaned"),
        ],
    )


def scenario_civilian_3_events() -> Scenario:
    """Baseline: three events over a long run with recovery in between."""
    return Scenario(
        name="civilian_3events",
        npc_type="civilian",
        total_ticks=200,
        delta_time=0.5,
        events=[
            ScenarioEvent(at_tick=5, type="explosion", position=Vec3(x=100, z=0), severity=80),
            ScenarioEvent(at_tick=100, type="shout", position=Vec3(x=50, z=0), severity=30),
            ScenarioEvent(at_tick=110, type="gunshot", position=Vec3(x=50, z=0), severity=90),
        ],
        expected=[
            ExpectedState(at_tick=0, expected_state="Idle"),
            ExpectedState(at_tick=8, expected_state="Flee"),
            ExpectedState(at_tick=80, expected_state="Idle"),
            ExpectedState(at_tick=115, expected_state="Flee"),
        ],
    )