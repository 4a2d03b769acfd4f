"""Synthetic configurations of growing size for the three architectures under comparison."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

HYBRID_STATES = ("Idle", "Patrol", "Alarmed", "Search", "Flee")


@dataclass(frozen=True)
class Condition:
    """A transition condition: a comparison of a board key with a value or another key, or a combination."""

    key: str = ""
    op: str = ""
    value: Any = None
    ref_key: str = ""
    all_of: tuple["Condition", ...] = ()
    any_of: tuple["Condition", ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """The condition as a JSON-ready dict; unset fields are left out."""
        result: dict[str, Any] = {}
        if self.key:
            result["key"] = self.key
        if self.op:
            result["op"] = self.op
        if self.value is not None:
            result["value"] = self.value
        if self.ref_key:
            result["ref_key"] = self.ref_key
        if self.all_of:
            result["and"] = [c.to_dict() for c in self.all_of]
        if self.any_of:
            result["or"] = [c.to_dict() for c in self.any_of]
        return result


@dataclass(frozen=True)
class StateConfig:
    """A state of a state machine."""

    name: str


@dataclass(frozen=True)
class TransitionConfig:
    """A prioritised transition between two states."""

    source: str
    target: str
    priority: int
    condition: Condition


@dataclass
class FSMConfig:
    """A state machine: its initial state, states and transitions."""

    initial_state: str
    states: list[StateConfig] = field(default_factory=list)
    transitions: list[TransitionConfig] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """The configuration as a JSON-ready dict."""
        return {
            "initial_state": self.initial_state,
            "states": [{"name": s.name} for s in self.states],
            "transitions": [
                {
                    "from": t.source,
                    "to": t.target,
                    "priority": t.priority,
                    "condition": t.condition.to_dict(),
                }
                for t in self.transitions
            ],
        }


@dataclass
class ScaleConfig:
    """Configurations for one behaviour count, with complexity statistics."""

    behavior_count: int
    pure_fsm_config: FSMConfig
    fsm_trans_count: int
    pure_bt_tree_json: bytes
    bt_node_count: int
    hybrid_fsm: FSMConfig
    hybrid_btrees: dict[str, bytes]
    hybrid_fsm_trans: int
    hybrid_bt_total: int


def _node(node_type: str, params: dict[str, Any] | None = None, children: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    node: dict[str, Any] = {"type": node_type}
    if params:
        node["params"] = params
    if children:
        node["children"] = children
    return node


def _encode(tree: dict[str, Any]) -> bytes:
    return json.dumps(tree, separators=(",", ":")).encode("utf-8")


def _pure_fsm(n: int) -> FSMConfig:
    states = [StateConfig(f"S{i}") for i in range(n)]
    transitions: list[TransitionConfig] = []
    for i in range(n):
        # Ring to the next state.
        transitions.append(
            TransitionConfig(
                f"S{i}", f"S{(i + 1) % n}", 5,
                Condition(key="threat_level", op=">=", value=10 + i),
            )
        )
        # Fall back to the initial state.
        if i > 0:
            transitions.append(
                TransitionConfig(f"S{i}", "S0", 1, Condition(key="threat_level", op="<", value=5))
            )
        # High-priority jump to the last state.
        if i < n - 1:
            transitions.append(
                TransitionConfig(f"S{i}", f"S{n - 1}", 10, Condition(key="threat_level", op=">=", value=90))
            )
    return FSMConfig(initial_state="S0", states=states, transitions=transitions)


def _pure_bt(n: int) -> tuple[bytes, int]:
    children = []
    for i in range(n):
        threshold = 90 - (i * 80 // n)
        children.append(
            _node(
                "sequence",
                children=[
                    _node("check_bb_float", {"key": "threat_level", "op": ">=", "value": threshold}),
                    _node("set_bb_value", {"key": "fsm_state", "value": f"S{i}"}),
                    _node("stub_action", {"name": f"action_{i}", "result": "success"}),
                ],
            )
        )
    root = _node("selector", children=children)
    return _encode(root), 4 * n + 1


def _hybrid_fsm() -> FSMConfig:
    def cmp(key: str, op: str, value: Any) -> Condition:
        return Condition(key=key, op=op, value=value)

    transitions = [
        TransitionConfig("Idle", "Alarmed", 10, cmp("last_event_type", "!=", "")),
        TransitionConfig("Idle", "Patrol", 3, cmp("threat_level", ">=", 5)),
        TransitionConfig("Patrol", "Alarmed", 10, cmp("threat_level", ">=", 20)),
        TransitionConfig("Patrol", "Idle", 1, cmp("threat_level", "<", 5)),
        TransitionConfig(
            "Alarmed", "Flee", 10,
            Condition(all_of=(
                cmp("threat_level", ">=", 50),
                Condition(key="threat_expire_at", op=">", ref_key="current_time"),
            )),
        ),
        TransitionConfig("Alarmed", "Search", 5, cmp("threat_level", ">=", 30)),
        TransitionConfig("Alarmed", "Idle", 1, cmp("last_event_type", "==", "")),
        TransitionConfig("Search", "Flee", 10, cmp("threat_level", ">=", 50)),
        TransitionConfig("Search", "Idle", 1, cmp("threat_level", "<", 10)),
        TransitionConfig(
            "Flee", "Idle", 5,
            Condition(any_of=(
                cmp("threat_level", "<", 20),
                Condition(key="threat_expire_at", op="<=", ref_key="current_time"),
            )),
        ),
    ]
    return FSMConfig(
        initial_state="Idle",
        states=[StateConfig(s) for s in HYBRID_STATES],
        transitions=transitions,
    )


def _hybrid_trees(n: int) -> tuple[dict[str, bytes], int]:
    per_state = max(1, n // 5)
    trees = {}
    total = 0
    for state in HYBRID_STATES:
        children = [
            _node("stub_action", {"name": f"{state}_action_{j}", "result": "success"})
            for j in range(per_state)
        ]
        trees[state] = _encode(_node("sequence", children=children))
        total += per_state + 1
    return trees, total


def generate_scale_config(behavior_count: int) -> ScaleConfig:
    """Build the pure-FSM, pure-BT and hybrid configurations for a behaviour count."""
    if behavior_count < 0:
        raise ValueError("behavior_count must be >= 0")
    pure_fsm = _pure_fsm(behavior_count)
    bt_json, bt_nodes = _pure_bt(behavior_count)
    hybrid_fsm = _hybrid_fsm()
    trees, tree_total = _hybrid_trees(behavior_count)
    return ScaleConfig(
        behavior_count=behavior_count,
        pure_fsm_config=pure_fsm,
        fsm_trans_count=len(pure_fsm.transitions),
        pure_bt_tree_json=bt_json,
        bt_node_count=bt_nodes,
        hybrid_fsm=hybrid_fsm,
        hybrid_btrees=trees,
        hybrid_fsm_trans=len(hybrid_fsm.transitions),
        hybrid_bt_total=tree_total,
    )