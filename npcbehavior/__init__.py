"""NPC behaviour building blocks: events, decisions, components, gateway and experiments."""

__version__ = "0.1.0"