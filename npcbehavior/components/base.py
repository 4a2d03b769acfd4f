"""Component interfaces, JSON loading and the component factory registry."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Mapping, MutableMapping

logger = logging.getLogger(__name__)


class ComponentError(ValueError):
    """A component configuration could not be turned into a component."""


class Component(ABC):
    """Base for every NPC component; each has a unique name."""

    @abstractmethod
    def name(self) -> str:
        """The component's unique name."""


class Tickable(Component):
    """A component that updates itself every frame."""

    @abstractmethod
    def tick(self, board: MutableMapping[str, Any], dt: float) -> None:
        """Advance the component by dt seconds, reading and writing the board."""


Factory = Callable[[Any], Component]


def load_json(raw: Any) -> dict[str, Any]:
    """Decode a component configuration into a dict; null and None give an empty dict."""
    if raw is None:
        return {}
    if isinstance(raw, Mapping):
        return dict(raw)
    try:
        if isinstance(raw, (bytes, bytearray)):
            raw = bytes(raw).decode("utf-8")
        if not isinstance(raw, str):
            raise ComponentError(f"cannot decode configuration of type {type(raw).__name__}")
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ComponentError(f"invalid JSON: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ComponentError("configuration must be a JSON object")
    return data


class Registry:
    """Maps component names to the factories that build them."""

    def __init__(self) -> None:
        self._factories: dict[str, Factory] = {}

    def register(self, name: str, factory: Factory) -> None:
        """Register a factory; registering the same name twice is an error."""
        if name in self._factories:
            raise ValueError(f"component: duplicate registration for {name!r}")
        self._factories[name] = factory
        logger.debug("component.registered name=%s", name)

    def create(self, name: str, raw: Any) -> Component:
        """Build the named component from its JSON configuration."""
        factory = self._factories.get(name)
        if factory is None:
            raise ComponentError(f"component: unknown type {name!r}")
        try:
            return factory(raw)
        except ValueError as exc:
            raise ComponentError(f"component: create {name!r}: {exc}") from exc

    def __contains__(self, name: object) -> bool:
        return name in self._factories