"""
Task group endpoint.
"""

from fastapi import APIRouter, HTTPException

from core import build_group
from core.models import TaskGroup

from ..state import get_task_source


router = APIRouter()


@router.get("/v1/task-groups/{group_id}")
async def get_task_group(group_id: str) -> TaskGroup:
    """Get all tasks launched in one batch together with batch statistics."""
    group = build_group(group_id, get_task_source().get_all_tasks())
    if group is None:
        raise HTTPException(status_code=404, detail="Task group not found")
    return group
