"""Comment endpoints. Listing is public; create, edit and delete need a token."""

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
from blog.schemas.comment import CommentCreate, CommentOut, CommentUpdate, CommentWithAuthor
from blog.services.ownership import get_owned_or_raise

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
def create_comment(
    body: CommentCreate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> Comment:
    """Comment on an existing post as the authenticated user."""
    if db.get(Post, body.post_id) is None:
        raise NotFoundError("Post not found.")
    comment = Comment(content=body.content, user_id=current_user.id, post_id=body.post_id)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    logger.info(
        "Create comment: id=%s on post id=%s by user id=%s",
        comment.id,
        comment.post_id,
        current_user.id,
    )
    return comment


@router.get("/{post_id}", response_model=list[CommentWithAuthor])
def list_comments_for_post(
    post_id: PathId,
    db: Annotated[Session, Depends(get_db)],
) -> list[Comment]:
    """Comments on a post, oldest first, each with its author."""
    if db.get(Post, post_id) is None:
        raise NotFoundError("Post not found.")
    return (
        db.query(Comment)
        .options(selectinload(Comment.user))
        .filter(Comment.post_id == post_id)
        .order_by(Comment.id)
        .all()
    )


@router.put("/{comment_id}", response_model=CommentOut)
def update_comment(
    comment_id: PathId,
    body: CommentUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> Comment:
    comment = get_owned_or_raise(db, Comment, comment_id, current_user.id, "edit")
    comment.content = body.content
    db.commit()
    db.refresh(comment)
    logger.info("Update comment: id=%s", comment.id)
    return comment


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    comment_id: PathId,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    comment = get_owned_or_raise(db, Comment, comment_id, current_user.id, "delete")
    db.delete(comment)
    db.commit()
    logger.info("Delete comment: id=%s", comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
