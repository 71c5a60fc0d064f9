from fastapi import APIRouter

from src.pipeline_api.api.v1 import assignments, hello, messages, releases, sets, tasks

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(hello.router)
api_router.include_router(messages.router)
api_router.include_router(assignments.router)
api_router.include_router(tasks.router)
api_router.include_router(releases.router)
api_router.include_router(sets.router)
