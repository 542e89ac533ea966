from app.api.api_v1.endpoints import admin, matches, rankings, scoring
from fastapi import APIRouter

api_router = APIRouter()

api_router.include_router(matches.router, prefix="/matches", tags=["matches"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(
    rankings.router, prefix="/tournaments", tags=["rankings"]
)
api_router.include_router(scoring.router, prefix="/scoring", tags=["scoring"])
