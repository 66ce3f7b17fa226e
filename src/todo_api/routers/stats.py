from __future__ import annotations

from fastapi import APIRouter, Depends

from ..dependencies import get_store
from ..schemas import PriorityCounts, StatsOut
from ..stats import compute_stats
from ..store import InMemoryTodoStore

router = APIRouter(tags=["stats"])


# PUBLIC_INTERFACE
@router.get(
    "/stats",
    response_model=StatsOut,
    summary="Todo Statistics",
    description="Totals, completion counts, per-priority counts and overdue count over all todos.",
)
async def get_stats(store: InMemoryTodoStore = Depends(get_store)) -> StatsOut:
    stats = compute_stats(store.all())
    return StatsOut(
        total=stats.total,
        completed=stats.completed,
        pending=stats.pending,
        overdue=stats.overdue,
        by_priority=PriorityCounts(**stats.by_priority),
    )
