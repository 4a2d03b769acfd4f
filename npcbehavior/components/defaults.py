"""The registry with every built-in component factory."""

from __future__ import annotations

from npcbehavior.components.base import Registry
from npcbehavior.components.emotion import emotion_factory
from npcbehavior.components.memory import memory_factory
from npcbehavior.components.movement import movement_factory
from npcbehavior.components.needs import needs_factory
from npcbehavior.components.profile import (
    behavior_factory,
    identity_factory,
    perception_factory,
    personality_factory,
    position_factory,
    social_factory,
)


def default_registry() -> Registry:
    """A registry holding all ten built-in component factories."""
    registry = Registry()
    registry.register("identity", identity_factory)
    registry.register("position", position_factory)
    registry.register("behavior", behavior_factory)
    registry.register("perception", perception_factory)
    registry.register("movement", movement_factory)
    registry.register("personality", personality_factory)
    registry.register("needs", needs_factory)
    registry.register("emotion", emotion_factory)
    registry.register("memory", memory_factory)
    registry.register("social", social_factory)
    return registry