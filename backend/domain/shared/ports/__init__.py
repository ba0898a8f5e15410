"""Shared ports used across domains."""

from .event_bus import EventHandler, IEventBus

__all__ = ["EventHandler", "IEventBus"]
