from __future__ import annotations

from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool

from xeoos.api.deps import Tasks, use_locale
from xeoos.core.auth import CurrentUser
from xeoos.core.rate_limit import RateLimit
from xeoos.schemas.common import PageBody
from xeoos.schemas.posts import IdRequest, TaskReportRequest

router = APIRouter(tags=["Tasks"])


@router.post("/task/get")
async def list_tasks(body: PageBody, ticket: RateLimit, user: CurrentUser, tasks: Tasks) -> dict:
    use_locale(body.lang)
    result = await run_in_threadpool(tasks.list_tasks, user["uid"], body.page)
    await ticket.record()
    return result


@router.post("/task/retry")
async def retry_task(body: IdRequest, ticket: RateLimit, user: CurrentUser, tasks: Tasks) -> dict:
    use_locale(body.lang)
    result = await tasks.retry(user["uid"], str(body.id) if body.id is not None else None)
    await ticket.record()
    return result


@router.post("/task/report")
async def report_task(body: TaskReportRequest, tasks: Tasks) -> dict:
    """Status callback for the translate worker (shared-password auth)."""

    use_locale(body.lang)
    return await tasks.report(body.password, body.task_uuid, body.status)
