from fastapi import APIRouter

from .feed import router as feed_router
from .people import router as people_router
from .posts import router as posts_router

api_router = APIRouter()
api_router.include_router(feed_router, prefix="/feed", tags=["feed"])
api_router.include_router(posts_router, prefix="/posts", tags=["posts"])
api_router.include_router(people_router, prefix="/people", tags=["people"])
