"""
Read-only HTTP status API for background tasks.

Serves task lists, details, statistics and a live SSE event stream for
dashboards and other local tooling.
"""

from .app import app
from .event_bus import get_event_bus, set_event_bus
from .routes import register_routes
from .state import get_task_source, set_task_source

# Register all routes with the app
register_routes(app)

__all__ = ["app", "get_task_source", "set_task_source", "get_event_bus", "set_event_bus"]
