"""Needs component: needs drain over time and the most urgent one is published."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, MutableMapping

from npcbehavior.components.base import ComponentError, Tickable, load_json

KEY_NEED_LOWEST = "need_lowest"
KEY_NEED_LOWEST_VAL = "need_lowest_val"


@dataclass
class Need:
    """One need with its current level, ceiling and drain rate."""

    name: str
    current: float = 0.0
    maximum: float = 0.0
    decay_rate: float = 0.0


@dataclass
class NeedsComponent(Tickable):
    """Drains every need and publishes the lowest."""

    need_types: list[Need]

    def name(self) -> str:
        return "needs"

    def tick(self, board: MutableMapping[str, Any], dt: float) -> None:
        lowest_name = ""
        lowest_value = math.inf
        for need in self.need_types:
            need.current = max(0.0, need.current - need.decay_rate * dt)
            if need.current < lowest_value:
                lowest_value = need.current
                lowest_name = need.name
        if lowest_name:
            board[KEY_NEED_LOWEST] = lowest_name
            board[KEY_NEED_LOWEST_VAL] = lowest_value


def _number(data: dict[str, Any], key: str) -> float:
    value = data.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ComponentError(f"{key} must be a number")
    return float(value)


def needs_factory(raw: Any) -> NeedsComponent:
    """Build a needs component; an unset current level starts at the maximum."""
    try:
        data = load_json(raw)
        items = data.get("need_types") or []
        if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
            raise ComponentError("need_types must be a list of objects")
        if not items:
            raise ComponentError("need_types must have at least one entry")
        needs = []
        for index, item in enumerate(items):
            name = item.get("name") or ""
            if not isinstance(name, str):
                raise ComponentError(f"need_types[{index}].name must be a string")
            if not name:
                raise ComponentError(f"need_types[{index}].name is required")
            need = Need(
                name=name,
                current=_number(item, "current"),
                maximum=_number(item, "max"),
                decay_rate=_number(item, "decay_rate"),
            )
            if need.maximum <= 0:
                raise ComponentError(f"need_types[{index}].max must be > 0")
            if need.current == 0:
                need.current = need.maximum
            needs.append(need)
    except ComponentError as exc:
        raise ComponentError(f"needs: {exc}") from exc
    return NeedsComponent(need_types=needs)