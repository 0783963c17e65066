import asyncio
import logging

from fastapi import APIRouter, Depends, Request, Response

from task_tracker.schema import Task, decode_task
from task_tracker.store import FirestoreTaskStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


def get_store(request: Request) -> FirestoreTaskStore:
    return request.app.state.store


@router.get("", response_model=list[Task], response_model_exclude_none=True)
async def get_tasks(store: FirestoreTaskStore = Depends(get_store)):
    tasks = await asyncio.to_thread(store.list_all)
    logger.info(f"Listed {len(tasks)} tasks")
    return tasks


@router.post("", response_model=Task, response_model_exclude_none=True)
async def create_task(request: Request, store: FirestoreTaskStore = Depends(get_store)):
    payload = decode_task(await request.body())
    task = await asyncio.to_thread(store.insert, payload)
    logger.info(f"Created task {task.id}")
    return task


@router.get("/{task_id}", response_model=Task, response_model_exclude_none=True)
async def get_task(task_id: str, store: FirestoreTaskStore = Depends(get_store)):
    return await asyncio.to_thread(store.find_by_id, task_id)


@router.put("/{task_id}", response_model=Task, response_model_exclude_none=True)
async def update_task(
    task_id: str, request: Request, store: FirestoreTaskStore = Depends(get_store)
):
    payload = decode_task(await request.body())
    task = await asyncio.to_thread(store.replace, task_id, payload)
    logger.info(f"Replaced task {task_id}")
    return task


@router.delete("/{task_id}", status_code=204, response_class=Response)
async def delete_task(task_id: str, store: FirestoreTaskStore = Depends(get_store)):
    await asyncio.to_thread(store.delete, task_id)
    logger.info(f"Deleted task {task_id}")
    return Response(status_code=204)
