"""Memory component: typed, decaying memories with reinforcement and eviction."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, MutableMapping

from npcbehavior.components.base import ComponentError, Tickable, load_json

logger = logging.getLogger(__name__)

KEY_MEMORY_COUNT = "memory_count"
KEY_MEMORY_THREAT_VALUE = "memory_threat_value"


@dataclass
class MemoryEntry:
    """One memory about a target."""

    type: str
    target_id: str
    value: float = 0.0
    timestamp: int = 0
    ttl: float = 0.0


@dataclass
class MemoryComponent(Tickable):
    """Bounded store of memories whose TTL counts down every tick."""

    capacity: int
    memory_types: list[str]
    decay_time: float
    _entries: list[MemoryEntry] = field(default_factory=list, init=False, repr=False)

    def name(self) -> str:
        return "memory"

    def supports_type(self, memory_type: str) -> bool:
        """Whether this component keeps memories of the given type."""
        return memory_type in self.memory_types

    def add_memory(self, entry: MemoryEntry) -> None:
        """Store a memory, reinforcing a matching one or evicting the oldest when full."""
        for existing in self._entries:
            if existing.type == entry.type and existing.target_id == entry.target_id:
                existing.value = max(existing.value, entry.value)
                existing.ttl = self.decay_time
                existing.timestamp = entry.timestamp
                logger.debug(
                    "memory.reinforced type=%s target=%s value=%s",
                    entry.type, entry.target_id, existing.value,
                )
                return

        if len(self._entries) >= self.capacity:
            oldest = min(range(len(self._entries)), key=lambda i: self._entries[i].timestamp)
            evicted = self._entries[oldest]
            logger.debug("memory.evicted type=%s target=%s", evicted.type, evicted.target_id)
            self._entries[oldest] = replace(entry)
            return

        self._entries.append(replace(entry))
        logger.debug("memory.added type=%s target=%s value=%s", entry.type, entry.target_id, entry.value)

    def get_memories(self, memory_type: str) -> list[MemoryEntry]:
        """Copies of every memory of the given type."""
        return [replace(e) for e in self._entries if e.type == memory_type]

    def has_memory(self, memory_type: str, target_id: str) -> bool:
        """Whether a memory of this type about this target exists."""
        return self.get_memory(memory_type, target_id) is not None

    def get_memory(self, memory_type: str, target_id: str) -> MemoryEntry | None:
        """A copy of the memory of this type about this target, or None."""
        for e in self._entries:
            if e.type == memory_type and e.target_id == target_id:
                return replace(e)
        return None

    def __len__(self) -> int:
        return len(self._entries)

    def tick(self, board: MutableMapping[str, Any], dt: float) -> None:
        """Drop expired memories and publish the count and strongest threat to the board."""
        alive = []
        for e in self._entries:
            e.ttl -= dt
            if e.ttl > 0:
                alive.append(e)
        self._entries = alive

        board[KEY_MEMORY_COUNT] = len(self._entries)
        board[KEY_MEMORY_THREAT_VALUE] = max(
            (e.value for e in self._entries if e.type == "threat" and e.value > 0), default=0.0
        )


def _integer(data: dict[str, Any], key: str) -> int:
    value = data.get(key, 0)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ComponentError(f"{key} must be an integer")
    return value


def _number(data: dict[str, Any], key: str) -> float:
    value = data.get(key, 0.0)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ComponentError(f"{key} must be a number")
    return float(value)


def _string_list(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ComponentError(f"{key} must be a list of strings")
    return list(value)


def memory_factory(raw: Any) -> MemoryComponent:
    """Build a memory component; capacity, memory_types and decay_time are validated."""
    try:
        data = load_json(raw)
        comp = MemoryComponent(
            capacity=_integer(data, "capacity"),
            memory_types=_string_list(data, "memory_types"),
            decay_time=_number(data, "decay_time"),
        )
        if comp.capacity < 1:
            raise ComponentError("capacity must be >= 1")
        if not comp.memory_types:
            raise ComponentError("memory_types must have at least one entry")
        if comp.decay_time <= 0:
            raise ComponentError("decay_time must be > 0")
    except ComponentError as exc:
        raise ComponentError(f"memory: {exc}") from exc
    return comp