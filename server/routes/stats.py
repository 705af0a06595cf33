"""
Aggregate task statistics endpoint.
"""

from fastapi import APIRouter

from core import build_stats
from core.models import TaskStats

from ..state import get_task_source


router = APIRouter()


@router.get("/v1/stats")
async def stats() -> TaskStats:
    """Counts by status and agent, tool call totals and durations."""
    return build_stats(get_task_source().get_all_tasks())
