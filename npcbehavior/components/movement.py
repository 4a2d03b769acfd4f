"""Movement component: wandering, patrolling and following on the XZ plane."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Any, MutableMapping

from npcbehavior.components.base import ComponentError, Tickable, load_json

KEY_NPC_POS_X = "npc_pos_x"
KEY_NPC_POS_Z = "npc_pos_z"
KEY_MOVE_TARGET_X = "move_target_x"
KEY_MOVE_TARGET_Z = "move_target_z"
KEY_MOVE_STATE = "move_state"
KEY_FOLLOW_TARGET_X = "follow_target_x"
KEY_FOLLOW_TARGET_Z = "follow_target_z"

MOVE_TYPES = frozenset({"wander", "patrol", "follow"})


def move_toward(pos_x: float, pos_z: float, target_x: float, target_z: float, max_dist: float) -> tuple[float, float]:
    """Step from the position toward the target by at most max_dist."""
    dx = target_x - pos_x
    dz = target_z - pos_z
    dist = math.sqrt(dx * dx + dz * dz)
    if dist == 0 or dist <= max_dist:
        return target_x, target_z
    ratio = max_dist / dist
    return pos_x + dx * ratio, pos_z + dz * ratio


def distance_2d(x1: float, z1: float, x2: float, z2: float) -> float:
    """Distance between two points on the XZ plane."""
    dx = x2 - x1
    dz = z2 - z1
    return math.sqrt(dx * dx + dz * dz)


@dataclass(frozen=True)
class Waypoint:
    """A patrol waypoint."""

    x: float = 0.0
    z: float = 0.0


@dataclass
class MovementComponent(Tickable):
    """Moves the NPC each tick according to its movement type."""

    move_type: str
    move_speed: float = 0.0
    wander_radius: float = 0.0
    patrol_waypoints: list[Waypoint] = field(default_factory=list)
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)
    _spawn_x: float = field(default=0.0, init=False, repr=False)
    _spawn_z: float = field(default=0.0, init=False, repr=False)
    _target_x: float = field(default=0.0, init=False, repr=False)
    _target_z: float = field(default=0.0, init=False, repr=False)
    _has_target: bool = field(default=False, init=False, repr=False)
    _wait_timer: float = field(default=0.0, init=False, repr=False)
    _patrol_index: int = field(default=0, init=False, repr=False)

    def name(self) -> str:
        return "movement"

    def set_spawn(self, x: float, z: float) -> None:
        """Record the origin that wandering stays around."""
        self._spawn_x = x
        self._spawn_z = z

    def tick(self, board: MutableMapping[str, Any], dt: float) -> None:
        pos_x = board.get(KEY_NPC_POS_X, 0.0)
        pos_z = board.get(KEY_NPC_POS_Z, 0.0)
        if self.move_type == "wander":
            self._tick_wander(board, pos_x, pos_z, dt)
        elif self.move_type == "patrol":
            self._tick_patrol(board, pos_x, pos_z, dt)
        elif self.move_type == "follow":
            self._tick_follow(board, pos_x, pos_z, dt)
        else:
            board[KEY_MOVE_STATE] = "idle"

    def _tick_wander(self, board: MutableMapping[str, Any], pos_x: float, pos_z: float, dt: float) -> None:
        if self._wait_timer > 0:
            self._wait_timer -= dt
            board[KEY_MOVE_STATE] = "arrived"
            return

        if not self._has_target:
            angle = self.rng.random() * 2 * math.pi
            dist = self.rng.random() * self.wander_radius
            self._target_x = self._spawn_x + math.cos(angle) * dist
            self._target_z = self._spawn_z + math.sin(angle) * dist
            self._has_target = True

        if distance_2d(pos_x, pos_z, self._target_x, self._target_z) < 1.0:
            self._has_target = False
            self._wait_timer = 1.0 + self.rng.random() * 2.0
            board[KEY_MOVE_STATE] = "arrived"
            return

        new_x, new_z = move_toward(pos_x, pos_z, self._target_x, self._target_z, self.move_speed * dt)
        self._write_position(board, new_x, new_z)

    def _tick_patrol(self, board: MutableMapping[str, Any], pos_x: float, pos_z: float, dt: float) -> None:
        if not self.patrol_waypoints:
            board[KEY_MOVE_STATE] = "idle"
            return
        target = self.patrol_waypoints[self._patrol_index]
        if distance_2d(pos_x, pos_z, target.x, target.z) < 1.0:
            self._patrol_index = (self._patrol_index + 1) % len(self.patrol_waypoints)
            board[KEY_MOVE_STATE] = "arrived"
            return
        new_x, new_z = move_toward(pos_x, pos_z, target.x, target.z, self.move_speed * dt)
        self._write_position(board, new_x, new_z)

    def _tick_follow(self, board: MutableMapping[str, Any], pos_x: float, pos_z: float, dt: float) -> None:
        if KEY_FOLLOW_TARGET_X not in board or KEY_FOLLOW_TARGET_Z not in board:
            board[KEY_MOVE_STATE] = "idle"
            return
        target_x = board[KEY_FOLLOW_TARGET_X]
        target_z = board[KEY_FOLLOW_TARGET_Z]
        if distance_2d(pos_x, pos_z, target_x, target_z) < 2.0:
            board[KEY_MOVE_STATE] = "arrived"
            return
        new_x, new_z = move_toward(pos_x, pos_z, target_x, target_z, self.move_speed * dt)
        self._write_position(board, new_x, new_z)

    def _write_position(self, board: MutableMapping[str, Any], x: float, z: float) -> None:
        board[KEY_NPC_POS_X] = x
        board[KEY_NPC_POS_Z] = z
        board[KEY_MOVE_TARGET_X] = self._target_x
        board[KEY_MOVE_TARGET_Z] = self._target_z
        board[KEY_MOVE_STATE] = "moving"


def _number(data: dict[str, Any], key: str) -> float:
    value = data.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ComponentError(f"{key} must be a number")
    return float(value)


def _waypoints(data: dict[str, Any]) -> list[Waypoint]:
    value = data.get("patrol_waypoints")
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(w, dict) for w in value):
        raise ComponentError("patrol_waypoints must be a list of objects")
    return [Waypoint(_number(w, "x"), _number(w, "z")) for w in value]


def movement_factory(raw: Any) -> MovementComponent:
    """Build a movement component, checking the settings its movement type needs."""
    try:
        data = load_json(raw)
        move_type = data.get("move_type") or ""
        if not isinstance(move_type, str):
            raise ComponentError("move_type must be a string")
        comp = MovementComponent(
            move_type=move_type,
            move_speed=_number(data, "move_speed"),
            wander_radius=_number(data, "wander_radius"),
            patrol_waypoints=_waypoints(data),
        )
        if not comp.move_type:
            raise ComponentError("move_type is required")
        if comp.move_type not in MOVE_TYPES:
            raise ComponentError(f"unknown move_type {comp.move_type!r}")
        if comp.move_speed < 0:
            raise ComponentError("move_speed must be >= 0")
        if comp.move_type == "wander" and comp.wander_radius <= 0:
            raise ComponentError("wander_radius is required for wander mode")
        if comp.move_type == "patrol" and not comp.patrol_waypoints:
            raise ComponentError("patrol_waypoints is required for patrol mode")
    except ComponentError as exc:
        raise ComponentError(f"movement: {exc}") from exc
    return comp