from __future__ import annotations

from fastapi import APIRouter

from api.routes import rooms


api_router = APIRouter()
api_router.include_router(rooms.router, prefix="/rooms", tags=["rooms"])
