from fastapi import APIRouter

from app.api.v1.endpoints import upload, jobs, worker, chat, summarize

api_router = APIRouter()

api_router.include_router(upload.router, tags=["upload"])
api_router.include_router(jobs.router, tags=["jobs"])
api_router.include_router(worker.router, tags=["worker"])
api_router.include_router(chat.router, tags=["chat"])
api_router.include_router(summarize.router, tags=["summarize"])
