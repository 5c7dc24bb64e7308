from fastapi import APIRouter

from ...routers import analytics as analytics_router
from ...routers import auth as auth_router
from ...routers import tasks as tasks_router


api_router = APIRouter(prefix="/api/v1")

api_router.include_router(auth_router.router)
api_router.include_router(tasks_router.router)
api_router.include_router(analytics_router.router)


@api_router.get("/", tags=["auth"])  # lightweight meta endpoint
def api_info():
    return {
        "name": "Personal Learning Planner API",
        "version": "v1",
        "docs": "/docs",
        "auth": {
            "register": "/api/v1/auth/register",
            "login": "/api/v1/auth/login",
            "me": "/api/v1/auth/me",
        },
        "tasks": "/api/v1/tasks",
        "dashboard": "/api/v1/dashboard",
        "analytics": "/api/v1/analytics",
    }
