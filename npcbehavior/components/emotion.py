"""Emotion component: fear builds up under threat memories, everything else decays."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, MutableMapping

from npcbehavior.components.base import ComponentError, Tickable, load_json

KEY_MEMORY_THREAT_VALUE = "memory_threat_value"
KEY_EMOTION_DOMINANT = "emotion_dominant"
KEY_EMOTION_DOMINANT_VAL = "emotion_dominant_val"


@dataclass
class EmotionState:
    """One emotion with its current value and rates."""

    name: str
    value: float = 0.0
    accumulate_rate: float = 0.0
    decay_rate: float = 0.0


@dataclass
class EmotionComponent(Tickable):
    """Tracks emotions and publishes the dominant one."""

    emotion_states: list[EmotionState]

    def name(self) -> str:
        return "emotion"

    def tick(self, board: MutableMapping[str, Any], dt: float) -> None:
        """Accumulate fear while a threat is remembered, decay the rest, publish the strongest."""
        threat_memory = board.get(KEY_MEMORY_THREAT_VALUE, 0.0)
        dominant_name = ""
        dominant_value = -1.0
        for state in self.emotion_states:
            if state.name == "fear" and threat_memory > 0:
                state.value += state.accumulate_rate * dt
            else:
                state.value = max(0.0, state.value - state.decay_rate * dt)
            if state.value > dominant_value:
                dominant_value = state.value
                dominant_name = state.name
        if dominant_name:
            board[KEY_EMOTION_DOMINANT] = dominant_name
            board[KEY_EMOTION_DOMINANT_VAL] = dominant_value


def _number(data: dict[str, Any], key: str) -> float:
    value = data.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ComponentError(f"{key} must be a number")
    return float(value)


def emotion_factory(raw: Any) -> EmotionComponent:
    """Build an emotion component; at least one named emotion is required."""
    try:
        data = load_json(raw)
        items = data.get("emotion_states") or []
        if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
            raise ComponentError("emotion_states must be a list of objects")
        if not items:
            raise ComponentError("emotion_states must have at least one entry")
        states = []
        for index, item in enumerate(items):
            name = item.get("name") or ""
            if not isinstance(name, str):
                raise ComponentError(f"emotion_states[{index}].name must be a string")
            if not name:
                raise ComponentError(f"emotion_states[{index}].name is required")
            states.append(
                EmotionState(
                    name=name,
                    value=_number(item, "value"),
                    accumulate_rate=_number(item, "accumulate_rate"),
                    decay_rate=_number(item, "decay_rate"),
                )
            )
    except ComponentError as exc:
        raise ComponentError(f"emotion: {exc}") from exc
    return EmotionComponent(emotion_states=states)