"""MemoryLane HTTP API."""

from .routes import get_event_service, router

__all__ = ["get_event_service", "router"]
