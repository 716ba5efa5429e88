from fastapi import APIRouter

from ignitia.api.routes import export, generate, generations, login, utils

api_router = APIRouter()
api_router.include_router(login.router)
api_router.include_router(utils.router)
api_router.include_router(generate.router, tags=["generate"])
api_router.include_router(generations.router, prefix="/generations", tags=["generations"])
api_router.include_router(export.router)
