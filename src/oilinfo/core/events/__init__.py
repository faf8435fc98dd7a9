"""Application lifecycle events."""

from oilinfo.core.events.lifespan import lifespan


__all__ = ["lifespan"]
