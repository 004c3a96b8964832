from fastapi import APIRouter

from contentgen.api.routes import auth, content, projects, templates, utils

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(utils.router, tags=["utils"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(content.router, prefix="/content", tags=["content"])
api_router.include_router(templates.router, prefix="/templates", tags=["templates"])
