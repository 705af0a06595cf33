"""
Route registration for the status API.
"""

from fastapi import FastAPI

from . import events, health, stats, task_groups, tasks


def register_routes(app: FastAPI) -> None:
    """Register all routes with the FastAPI application."""
    app.include_router(health.router)
    app.include_router(stats.router)
    app.include_router(tasks.router)
    app.include_router(task_groups.router)
    app.include_router(events.router)
