from npcbehavior.decision import (
    DEFAULT_WEIGHTS,
    Center,
    DecisionInput,
    DecisionWeights,
    PerceiveResult,
    calc_threat,
)
from npcbehavior.event import Event, EventTypeConfig, Vec3


def evt_types():
    return {
        "explosion": EventTypeConfig("explosion", 80, 15, "auditory", 500),
        "gunshot": EventTypeConfig("gunshot", 90, 10, "auditory", 300),
        "shout": EventTypeConfig("shout", 30, 8, "auditory", 200),
    }


def board_at(time=10000):
    return {"current_time": time}


def test_calc_threat_zero_distance():
    assert calc_threat(80, Vec3(), Vec3(), 500) == 80


def test_calc_threat_half_range():
    assert calc_threat(80, Vec3(), Vec3(250, 0, 0), 500) == 40


def test_calc_threat_at_range():
    assert calc_threat(80, Vec3(), Vec3(500, 0, 0), 500) == 0


def test_calc_threat_no_range_returns_severity():
    assert calc_threat(80, Vec3(), Vec3(1000, 0, 0), 0) == 80


def test_evaluate_threat_only():
    board = board_at()
    evt = Event(id="evt_1", type="explosion", position=Vec3(100, 0, 0), severity=80, ttl=10)
    Center(10.0).evaluate(
        board, Vec3(), DecisionInput(perceived=[PerceiveResult(evt, 64)], weights=DEFAULT_WEIGHTS), evt_types(), 0.1
    )
    assert board["threat_level"] == 64
    assert board["decision_winner"] == "threat"
    assert board["threat_score"] == 64
    assert board["threat_source"] == "evt_1"
    assert board["last_event_type"] == "explosion"
    assert board["threat_expire_at"] == 20000


def test_evaluate_needs_priority():
    board = board_at()
    decision_input = DecisionInput(
        perceived=[PerceiveResult(Event(id="e1", type="shout", severity=30, ttl=8), 20)],
        need_urgency=80,
        emotion_value=10,
        weights=DecisionWeights(threat=0.3, needs=0.5, emotion=0.2),
    )
    Center(10.0).evaluate(board, Vec3(), decision_input, evt_types(), 0.1)
    assert board["decision_winner"] == "needs"
    assert board["need_score"] == 80


def test_evaluate_emotion_priority_timid():
    board = board_at()
    decision_input = DecisionInput(
        perceived=[PerceiveResult(Event(id="e1", type="shout", severity=30, ttl=8), 25)],
        need_urgency=30,
        emotion_value=70,
        weights=DecisionWeights(threat=0.2, needs=0.2, emotion=0.6),
    )
    Center(10.0).evaluate(board, Vec3(), decision_input, evt_types(), 0.1)
    assert board["decision_winner"] == "emotion"


def test_evaluate_threat_override():
    board = board_at()
    decision_input = DecisionInput(
        perceived=[PerceiveResult(Event(id="e1", type="explosion", severity=80, ttl=10), 75)],
        need_urgency=60,
        emotion_value=40,
        weights=DecisionWeights(threat=0.5, needs=0.3, emotion=0.2),
    )
    Center(10.0).evaluate(board, Vec3(), decision_input, evt_types(), 0.1)
    assert board["decision_winner"] == "threat"


def test_evaluate_default_weights_always_threat():
    board = board_at()
    decision_input = DecisionInput(
        perceived=[PerceiveResult(Event(id="e1", type="shout", severity=30, ttl=8), 5)],
        need_urgency=90,
        emotion_value=80,
        weights=DEFAULT_WEIGHTS,
    )
    Center(10.0).evaluate(board, Vec3(), decision_input, evt_types(), 0.1)
    assert board["decision_winner"] == "threat"


def test_evaluate_scores_written():
    board = board_at()
    decision_input = DecisionInput(
        perceived=[PerceiveResult(Event(id="e1", type="explosion", severity=80, ttl=10), 55)],
        need_urgency=42,
        emotion_value=33,
        weights=DEFAULT_WEIGHTS,
    )
    Center(10.0).evaluate(board, Vec3(), decision_input, evt_types(), 0.1)
    assert board["threat_score"] == 55
    assert board["need_score"] == 42
    assert board["emotion_score"] == 33


def test_evaluate_decay_no_events():
    board = {"threat_level": 50.0, "threat_source": "old_evt"}
    Center(10.0).evaluate(board, Vec3(), DecisionInput(), evt_types(), 1.0)
    assert board["threat_level"] == 40
    assert board["threat_source"] == "old_evt"


def test_evaluate_decay_to_zero():
    board = {"threat_level": 5.0, "threat_source": "old", "last_event_type": "explosion"}
    Center(10.0).evaluate(board, Vec3(), DecisionInput(), evt_types(), 1.0)
    assert board["threat_level"] == 0
    assert board["threat_source"] == ""
    assert board["last_event_type"] == ""


def test_evaluate_no_threat_level_stays_absent():
    board = {}
    Center(10.0).evaluate(board, Vec3(), DecisionInput(), evt_types(), 1.0)
    assert "threat_level" not in board
    assert board["decision_winner"] == "threat"


def test_evaluate_empty_event_types():
    board = board_at()
    evt = Event(id="e1", type="unknown", severity=80, ttl=10)
    Center(10.0).evaluate(board, Vec3(), DecisionInput(perceived=[PerceiveResult(evt, 80)]), {}, 0.1)
    assert board["threat_level"] == 80
    assert board["threat_source"] == "e1"


def test_evaluate_zero_severity():
    board = board_at()
    evt = Event(id="e1", type="whisper", severity=0, ttl=10)
    types = {"whisper": EventTypeConfig(name="whisper", range=100)}
    Center(10.0).evaluate(board, Vec3(), DecisionInput(perceived=[PerceiveResult(evt, 0)]), types, 0.1)
    assert board.get("threat_level", 0) == 0
    assert board["threat_score"] == 0


def test_evaluate_negative_severity():
    board = board_at()
    evt = Event(id="e1", type="heal", severity=-50, ttl=10)
    types = {"heal": EventTypeConfig(name="heal", range=100)}
    Center(10.0).evaluate(board, Vec3(), DecisionInput(perceived=[PerceiveResult(evt, -50)]), types, 0.1)
    assert "threat_level" not in board
    assert board["threat_score"] == 0


def test_evaluate_massive_decay():
    board = {"threat_level": 1000.0, "threat_source": "old", "last_event_type": "old"}
    Center(1e6).evaluate(board, Vec3(), DecisionInput(weights=DEFAULT_WEIGHTS), None, 1.0)
    assert board["threat_level"] == 0
    assert board["threat_source"] == ""