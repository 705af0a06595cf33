"""
Health check endpoint.
"""

import time

from fastapi import APIRouter

from ..app import API_VERSION
from ..state import get_task_source


router = APIRouter()

_start_time = time.monotonic()


@router.get("/v1/health")
async def health() -> dict:
    """Health check endpoint."""
    return {
        "status": "ok",
        "uptime": int(time.monotonic() - _start_time),
        "version": API_VERSION,
        "taskCount": len(get_task_source().get_all_tasks()),
    }
