"""Configuration-only components: identity, position, perception, personality, social, behavior."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from npcbehavior.components.base import Component, ComponentError, load_json
from npcbehavior.event import Vec3

T = TypeVar("T")


def _parse(prefix: str, raw: Any, build: Callable[[dict[str, Any]], T]) -> T:
    try:
        return build(load_json(raw))
    except ComponentError as exc:
        raise ComponentError(f"{prefix}: {exc}") from exc


def _text(data: dict[str, Any], key: str, default: str = "") -> str:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ComponentError(f"{key} must be a string")
    return value


def _number(data: dict[str, Any], key: str, default: float = 0.0) -> float:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ComponentError(f"{key} must be a number")
    return float(value)


def _integer(data: dict[str, Any], key: str, default: int = 0) -> int:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise ComponentError(f"{key} must be an integer")
    return value


def _object(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ComponentError(f"{key} must be an object")
    return value


def _string_list(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ComponentError(f"{key} must be a list of strings")
    return list(value)


def _string_map(data: dict[str, Any], key: str) -> dict[str, str]:
    value = _object(data, key)
    if not all(isinstance(v, str) for v in value.values()):
        raise ComponentError(f"{key} values must be strings")
    return dict(value)


@dataclass
class IdentityComponent(Component):
    """Who the NPC is; every NPC has one."""

    display_name: str
    model_id: str
    tags: list[str] = field(default_factory=list)

    def name(self) -> str:
        return "identity"


def identity_factory(raw: Any) -> IdentityComponent:
    """Build an identity component; name and model_id are required."""

    def build(data: dict[str, Any]) -> IdentityComponent:
        comp = IdentityComponent(
            display_name=_text(data, "name"),
            model_id=_text(data, "model_id"),
            tags=_string_list(data, "tags"),
        )
        if not comp.display_name:
            raise ComponentError("name is required")
        if not comp.model_id:
            raise ComponentError("model_id is required")
        return comp

    return _parse("identity", raw, build)


@dataclass
class PositionComponent(Component):
    """Where the NPC is; every NPC has one."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    orientation: float = 0.0
    zone_id: str = ""

    def name(self) -> str:
        return "position"

    def to_vec3(self) -> Vec3:
        """The position as a world point."""
        return Vec3(self.x, self.y, self.z)


def position_factory(raw: Any) -> PositionComponent:
    """Build a position component; every field is optional."""
    return _parse(
        "position",
        raw,
        lambda data: PositionComponent(
            x=_number(data, "x"),
            y=_number(data, "y"),
            z=_number(data, "z"),
            orientation=_number(data, "orientation"),
            zone_id=_text(data, "zone_id"),
        ),
    )


@dataclass
class PerceptionComponent(Component):
    """How far the NPC sees and hears and how many stimuli it attends to."""

    visual_range: float = 0.0
    auditory_range: float = 0.0
    attention_capacity: int = 5

    def name(self) -> str:
        return "perception"


def perception_factory(raw: Any) -> PerceptionComponent:
    """Build a perception component; attention_capacity defaults to 5."""

    def build(data: dict[str, Any]) -> PerceptionComponent:
        comp = PerceptionComponent(
            visual_range=_number(data, "visual_range"),
            auditory_range=_number(data, "auditory_range"),
            attention_capacity=_integer(data, "attention_capacity", 5),
        )
        if comp.visual_range < 0:
            raise ComponentError("visual_range must be >= 0")
        if comp.auditory_range < 0:
            raise ComponentError("auditory_range must be >= 0")
        if comp.attention_capacity < 1:
            raise ComponentError("attention_capacity must be >= 1")
        return comp

    return _parse("perception", raw, build)


@dataclass(frozen=True)
class PersonalityWeights:
    """Decision weights a personality gives to threat, needs and emotion."""

    threat: float = 0.0
    needs: float = 0.0
    emotion: float = 0.0


PERSONALITY_TYPES = frozenset({"timid", "aggressive", "docile", "curious"})


@dataclass
class PersonalityComponent(Component):
    """Personality that shapes the decision weights."""

    personality_type: str
    decision_weights: PersonalityWeights = PersonalityWeights()
    aggro_range: float = 0.0
    flee_threshold: float = 0.0

    def name(self) -> str:
        return "personality"


def personality_factory(raw: Any) -> PersonalityComponent:
    """Build a personality component; the type must be a known one."""

    def build(data: dict[str, Any]) -> PersonalityComponent:
        weights = _object(data, "decision_weights")
        comp = PersonalityComponent(
            personality_type=_text(data, "personality_type"),
            decision_weights=PersonalityWeights(
                threat=_number(weights, "threat"),
                needs=_number(weights, "needs"),
                emotion=_number(weights, "emotion"),
            ),
            aggro_range=_number(data, "aggro_range"),
            flee_threshold=_number(data, "flee_threshold"),
        )
        if not comp.personality_type:
            raise ComponentError("personality_type is required")
        if comp.personality_type not in PERSONALITY_TYPES:
            raise ComponentError(f"unknown type {comp.personality_type!r}")
        return comp

    return _parse("personality", raw, build)


@dataclass
class SocialComponent(Component):
    """Group membership; only the leader and follower roles drive formation logic."""

    group_id: str = ""
    faction: str = ""
    role: str = ""
    follow_target: str = ""

    def name(self) -> str:
        return "social"


def social_factory(raw: Any) -> SocialComponent:
    """Build a social component; every field is optional."""
    return _parse(
        "social",
        raw,
        lambda data: SocialComponent(
            group_id=_text(data, "group_id"),
            faction=_text(data, "faction"),
            role=_text(data, "role"),
            follow_target=_text(data, "follow_target"),
        ),
    )


@dataclass
class BehaviorComponent(Component):
    """References to the state machine and behaviour trees; the runtime fills fsm and btrees."""

    fsm_ref: str
    bt_refs: dict[str, str]
    fsm: Any = field(default=None, compare=False, repr=False)
    btrees: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def name(self) -> str:
        return "behavior"


def behavior_factory(raw: Any) -> BehaviorComponent:
    """Build a behavior component; fsm_ref and at least one bt_refs entry are required."""

    def build(data: dict[str, Any]) -> BehaviorComponent:
        comp = BehaviorComponent(fsm_ref=_text(data, "fsm_ref"), bt_refs=_string_map(data, "bt_refs"))
        if not comp.fsm_ref:
            raise ComponentError("fsm_ref is required")
        if not comp.bt_refs:
            raise ComponentError("bt_refs must have at least one entry")
        return comp

    return _parse("behavior", raw, build)