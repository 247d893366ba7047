"""Post endpoints. Reads are public; writes need a token and only the author may edit or delete."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session, selectinload

from blog.api.auth import get_current_user
from blog.core.database import get_db
from blog.core.errors import NotFoundError
from blog.models import Comment, Post
from blog.schemas.auth import CurrentUser
from blog.schemas.common import PathId
from blog.schemas.post import PostCreate, PostDetail, PostOut, PostUpdate
from blog.services.ownership import get_owned_or_raise

logger = logging.getLogger(__name__)

router = APIRouter()


def _with_author_and_comments():
    return (
        selectinload(Post.user),
        selectinload(Post.comments).selectinload(Comment.user),
    )


@router.post("", response_model=PostOut, status_code=status.HTTP_201_CREATED)
def create_post(
    body: PostCreate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> Post:
    """Create a post owned by the authenticated user."""
    post = Post(title=body.title, content=body.content, user_id=current_user.id)
    db.add(post)
    db.commit()
    db.refresh(post)
    logger.info("Create post: id=%s by user id=%s", post.id, current_user.id)
    return post


@router.get("", response_model=list[PostDetail])
def list_posts(
    db: Annotated[Session, Depends(get_db)],
) -> list[Post]:
    """All posts with author (id, username, email) and comments with their author."""
    return (
        db.query(Post)
        .options(*_with_author_and_comments())
        .order_by(Post.id)
        .all()
    )


@router.get("/{post_id}", response_model=PostDetail)
def get_post(
    post_id: PathId,
    db: Annotated[Session, Depends(get_db)],
) -> Post:
    post = (
        db.query(Post)
        .options(*_with_author_and_comments())
        .filter(Post.id == post_id)
        .first()
    )
    if post is None:
        raise NotFoundError("Post not found.")
    return post


@router.put("/{post_id}", response_model=PostOut)
def update_post(
    post_id: PathId,
    body: PostUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> Post:
    """Replace title and content. 403 unless the caller wrote the post."""
    post = get_owned_or_raise(db, Post, post_id, current_user.id, "edit")
    post.title = body.title
    post.content = body.content
    db.commit()
    db.refresh(post)
    logger.info("Update post: id=%s", post.id)
    return post


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: PathId,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Delete a post and its comments. 403 unless the caller wrote the post."""
    post = get_owned_or_raise(db, Post, post_id, current_user.id, "delete")
    db.delete(post)
    db.commit()
    logger.info("Delete post: id=%s", post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
