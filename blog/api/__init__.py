"""API routes, mounted under settings.API_PREFIX."""

from fastapi import APIRouter

from blog.api import auth, comments, health, posts

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(posts.router, prefix="/posts", tags=["posts"])
router.include_router(comments.router, prefix="/comments", tags=["comments"])
