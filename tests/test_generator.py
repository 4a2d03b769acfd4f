import json

import pytest

from npcbehavior.experiment.generator import (
    Condition,
    FSMConfig,
    StateConfig,
    TransitionConfig,
    generate_scale_config,
)

BEHAVIOR_COUNTS = [10, 50, 100, 150, 200]


def _count_nodes(node):
    return 1 + sum(_count_nodes(c) for c in node.get("children", []))


@pytest.mark.parametrize("n", BEHAVIOR_COUNTS)
def test_config_complexity_counts_match_content(n):
    cfg = generate_scale_config(n)
    assert cfg.behavior_count == n
    assert cfg.fsm_trans_count == len(cfg.pure_fsm_config.transitions)
    assert len(cfg.pure_fsm_config.states) == n
    assert cfg.bt_node_count == _count_nodes(json.loads(cfg.pure_bt_tree_json))
    assert cfg.hybrid_fsm_trans == 10
    total = sum(_count_nodes(json.loads(t)) for t in cfg.hybrid_btrees.values())
    assert cfg.hybrid_bt_total == total


def test_pinned_counts_for_ten():
    cfg = generate_scale_config(10)
    assert cfg.fsm_trans_count == 28
    assert cfg.bt_node_count == 41
    assert cfg.hybrid_fsm_trans == 10
    assert cfg.hybrid_bt_total == 15


@pytest.mark.parametrize("n", [10, 50, 100, 200])
def test_marginal_cost(n):
    a = generate_scale_config(n)
    b = generate_scale_config(n + 1)
    assert b.fsm_trans_count - a.fsm_trans_count == 3
    assert b.bt_node_count - a.bt_node_count == 4
    assert b.hybrid_fsm_trans - a.hybrid_fsm_trans == 0
    assert b.hybrid_bt_total - a.hybrid_bt_total == 0


def test_pure_fsm_transition_order():
    cfg = generate_scale_config(3).pure_fsm_config
    assert cfg.initial_state == "S0"
    pairs = [(t.source, t.target, t.priority) for t in cfg.transitions]
    assert pairs == [
        ("S0", "S1", 5), ("S0", "S2", 10),
        ("S1", "S2", 5), ("S1", "S0", 1), ("S1", "S2", 10),
        ("S2", "S0", 5), ("S2", "S0", 1),
    ]
    assert cfg.transitions[2].condition.to_dict() == {"key": "threat_level", "op": ">=", "value": 11}


def test_single_behavior_fsm_loops_to_itself():
    cfg = generate_scale_config(1)
    assert cfg.fsm_trans_count == 1
    t = cfg.pure_fsm_config.transitions[0]
    assert (t.source, t.target) == ("S0", "S0")


def test_pure_bt_tree_structure():
    tree = json.loads(generate_scale_config(10).pure_bt_tree_json)
    assert tree["type"] == "selector"
    assert len(tree["children"]) == 10
    first = tree["children"][0]
    assert [c["type"] for c in first["children"]] == ["check_bb_float", "set_bb_value", "stub_action"]
    assert first["children"][0]["params"] == {"key": "threat_level", "op": ">=", "value": 90}
    last = tree["children"][9]
    assert last["children"][0]["params"]["value"] == 18
    assert last["children"][1]["params"] == {"key": "fsm_state", "value": "S9"}
    assert last["children"][2]["params"] == {"name": "action_9", "result": "success"}


def test_hybrid_trees():
    cfg = generate_scale_config(12)
    assert sorted(cfg.hybrid_btrees) == sorted(["Idle", "Patrol", "Alarmed", "Search", "Flee"])
    tree = json.loads(cfg.hybrid_btrees["Flee"])
    assert tree["type"] == "sequence"
    assert [c["params"]["name"] for c in tree["children"]] == ["Flee_action_0", "Flee_action_1"]
    assert cfg.hybrid_bt_total == 15


def test_hybrid_small_count_has_one_action_per_state():
    cfg = generate_scale_config(2)
    assert cfg.hybrid_bt_total == 10
    assert len(json.loads(cfg.hybrid_btrees["Idle"])["children"]) == 1


def test_hybrid_fsm_conditions():
    fsm = generate_scale_config(10).hybrid_fsm
    assert fsm.initial_state == "Idle"
    assert [s.name for s in fsm.states] == ["Idle", "Patrol", "Alarmed", "Search", "Flee"]
    assert fsm.transitions[0].condition.to_dict() == {"key": "last_event_type", "op": "!=", "value": ""}
    flee = fsm.transitions[4].condition.to_dict()
    assert flee == {
        "and": [
            {"key": "threat_level", "op": ">=", "value": 50},
            {"key": "threat_expire_at", "op": ">", "ref_key": "current_time"},
        ]
    }
    back = fsm.transitions[9].condition.to_dict()
    assert back["or"][1] == {"key": "threat_expire_at", "op": "<=", "ref_key": "current_time"}


def test_fsm_config_to_dict_round_trips_through_json():
    cfg = FSMConfig(
        initial_state="A",
        states=[StateConfig("A"), StateConfig("B")],
        transitions=[TransitionConfig("A", "B", 3, Condition(key="k", op="<", value=1))],
    )
    data = json.loads(json.dumps(cfg.to_dict()))
    assert data == {
        "initial_state": "A",
        "states": [{"name": "A"}, {"name": "B"}],
        "transitions": [
            {"from": "A", "to": "B", "priority": 3, "condition": {"key": "k", "op": "<", "value": 1}}
        ],
    }


def test_negative_count_rejected():
    with pytest.raises(ValueError):
        generate_scale_config(-1)