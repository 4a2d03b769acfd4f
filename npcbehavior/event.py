"""World events: positions, event type configuration, event instances and the bus."""

from __future__ import annotations

import itertools
import json
import math
import threading
from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class Vec3:
    """A point in world space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


def distance(a: Vec3, b: Vec3) -> float:
    """Distance between two points on the XZ plane; the Y axis is ignored."""
    dx = a.x - b.x
    dz = a.z - b.z
    return math.sqrt(dx * dx + dz * dz)


@dataclass
class EventTypeConfig:
    """Definition of one kind of event, as loaded from configuration."""

    name: str = ""
    default_severity: float = 0.0
    default_ttl: float = 0.0
    perception_mode: str = ""
    range: float = 0.0

    @classmethod
    def from_json(cls, raw: str | bytes | bytearray | Mapping[str, Any]) -> "EventTypeConfig":
        """Build a configuration from a JSON document or an already decoded mapping."""
        if isinstance(raw, Mapping):
            data: Any = dict(raw)
        else:
            if isinstance(raw, (bytes, bytearray)):
                raw = raw.decode("utf-8")
            data = json.loads(raw)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("event type config must be a JSON object")

        def number(key: str) -> float:
            value = data.get(key)
            if value is None:
                return 0.0
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{key} must be a number")
            return float(value)

        def text(key: str) -> str:
            value = data.get(key)
            if value is None:
                return ""
            if not isinstance(value, str):
                raise ValueError(f"{key} must be a string")
            return value

        return cls(
            name=text("name"),
            default_severity=number("default_severity"),
            default_ttl=number("default_ttl"),
            perception_mode=text("perception_mode"),
            range=number("range"),
        )


@dataclass
class Event:
    """A live event instance; its TTL counts down every tick."""

    id: str = ""
    type: str = ""
    position: Vec3 = Vec3()
    severity: float = 0.0
    ttl: float = 0.0
    source_id: str = ""
    zone_id: str = ""


_event_ids = itertools.count(1)
_event_id_lock = threading.Lock()


def _next_event_id() -> str:
    with _event_id_lock:
        return f"evt_{next(_event_ids)}"


def new_event(
    type_config: EventTypeConfig,
    position: Vec3,
    source_id: str = "",
    severity_override: float = 0.0,
    zone_id: str = "",
) -> Event:
    """Create an event from its type; a positive severity_override replaces the default."""
    severity = severity_override if severity_override > 0 else type_config.default_severity
    return Event(
        id=_next_event_id(),
        type=type_config.name,
        position=position,
        severity=severity,
        ttl=type_config.default_ttl,
        source_id=source_id,
        zone_id=zone_id,
    )


class Bus:
    """Thread-safe holder of the active events and their lifetimes."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._active: list[Event] = []

    def publish(self, event: Event) -> None:
        """Add an event to the bus."""
        with self._lock:
            self._active.append(event)

    def tick(self, dt: float) -> None:
        """Count every event's TTL down by dt and drop the ones that reach zero."""
        with self._lock:
            alive = []
            for event in self._active:
                event.ttl -= dt
                if event.ttl > 0:
                    alive.append(event)
            self._active = alive

    def active(self) -> list[Event]:
        """A snapshot list of the currently active events."""
        with self._lock:
            return list(self._active)

    def active_count(self) -> int:
        """Number of currently active events."""
        with self._lock:
            return len(self._active)