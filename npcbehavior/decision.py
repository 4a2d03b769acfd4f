"""Decision centre: multi-dimensional scoring, weighted arbitration and threat decay."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, MutableMapping, Sequence

from npcbehavior.event import Event, EventTypeConfig, Vec3, distance

logger = logging.getLogger(__name__)

KEY_CURRENT_TIME = "current_time"
KEY_THREAT_LEVEL = "threat_level"
KEY_THREAT_SOURCE = "threat_source"
KEY_LAST_EVENT_TYPE = "last_event_type"
KEY_THREAT_EXPIRE_AT = "threat_expire_at"
KEY_THREAT_SCORE = "threat_score"
KEY_NEED_SCORE = "need_score"
KEY_EMOTION_SCORE = "emotion_score"
KEY_DECISION_WINNER = "decision_winner"


@dataclass(frozen=True)
class DecisionWeights:
    """Weights applied to the threat, needs and emotion scores."""

    threat: float = 0.0
    needs: float = 0.0
    emotion: float = 0.0


DEFAULT_WEIGHTS = DecisionWeights(threat=1.0, needs=0.0, emotion=0.0)


@dataclass
class PerceiveResult:
    """An event the NPC perceived, with the strength it was perceived at."""

    event: Event
    strength: float


@dataclass
class DecisionInput:
    """Everything the decision centre needs for one NPC in one tick."""

    npc_id: str = ""
    perceived: Sequence[PerceiveResult] = field(default_factory=list)
    need_urgency: float = 0.0
    emotion_value: float = 0.0
    weights: DecisionWeights = DEFAULT_WEIGHTS


def calc_threat(severity: float, npc_pos: Vec3, event_pos: Vec3, event_range: float) -> float:
    """Threat of one event, falling off linearly with distance out to its range."""
    if event_range <= 0:
        return severity
    factor = max(0.0, 1 - distance(npc_pos, event_pos) / event_range)
    return severity * factor


@dataclass
class Center:
    """Stateless decision centre; all NPC state lives in each NPC's board."""

    decay_rate: float

    def evaluate(
        self,
        board: MutableMapping[str, Any],
        npc_pos: Vec3,
        decision_input: DecisionInput,
        event_types: Mapping[str, EventTypeConfig] | None,
        dt: float,
    ) -> None:
        """Score threat, needs and emotion, pick a winner and write the results to the board."""
        threat_score, max_event = self._strongest(decision_input.perceived)
        need_score = decision_input.need_urgency
        emotion_score = decision_input.emotion_value

        board[KEY_THREAT_SCORE] = threat_score
        board[KEY_NEED_SCORE] = need_score
        board[KEY_EMOTION_SCORE] = emotion_score

        w = decision_input.weights
        winner, best = "threat", threat_score * w.threat
        if need_score * w.needs > best:
            winner, best = "needs", need_score * w.needs
        if emotion_score * w.emotion > best:
            winner = "emotion"
        board[KEY_DECISION_WINNER] = winner

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "decision.evaluated npc_id=%s threat_score=%s need_score=%s "
                "emotion_score=%s winner=%s threat_source=%s",
                decision_input.npc_id,
                threat_score,
                need_score,
                emotion_score,
                winner,
                max_event.id if max_event is not None else "",
            )

        if max_event is not None:
            board[KEY_THREAT_LEVEL] = threat_score
            board[KEY_THREAT_SOURCE] = max_event.id
            board[KEY_LAST_EVENT_TYPE] = max_event.type
            current_time = board.get(KEY_CURRENT_TIME, 0)
            board[KEY_THREAT_EXPIRE_AT] = current_time + int(max_event.ttl * 1000)
        elif not decision_input.perceived:
            self._decay(board, dt)

    @staticmethod
    def _strongest(perceived: Sequence[PerceiveResult]) -> tuple[float, Event | None]:
        max_threat = 0.0
        max_event = None
        for result in perceived:
            if result.strength > max_threat:
                max_threat = result.strength
                max_event = result.event
        return max_threat, max_event

    def _decay(self, board: MutableMapping[str, Any], dt: float) -> None:
        current = board.get(KEY_THREAT_LEVEL)
        if current is None or current <= 0:
            return
        new_level = max(0.0, current - self.decay_rate * dt)
        board[KEY_THREAT_LEVEL] = new_level
        if new_level == 0:
            board[KEY_THREAT_SOURCE] = ""
            board[KEY_LAST_EVENT_TYPE] = ""