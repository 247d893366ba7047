"""Ownership policy: only the user who wrote a post or comment may change or delete it."""

import logging
from typing import Any, TypeVar

from sqlalchemy.orm import Session

from blog.core.errors import AuthorizationError, NotFoundError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


def is_owner(resource: Any, caller_id: int, owner_field: str = "user_id") -> bool:
    """True if the resource's owner id equals caller_id."""
    owner_id = getattr(resource, owner_field, None)
    return owner_id is not None and owner_id == caller_id


def get_owned_or_raise(
    db: Session,
    model: type[ModelT],
    resource_id: int,
    caller_id: int,
    action: str,
    owner_field: str = "user_id",
) -> ModelT:
    """
    Load model by primary key and check that caller_id owns it.

    Raises NotFoundError ("Post not found.") when absent and AuthorizationError
    ("You can only delete your own posts.") when owned by someone else.
    """
    name = model.__name__
    resource = db.get(model, resource_id)
    if resource is None:
        raise NotFoundError(f"{name} not found.")
    if not is_owner(resource, caller_id, owner_field):
        logger.warning(
            "Ownership check failed: %s id=%s action=%s caller=%s",
            name,
            resource_id,
            action,
            caller_id,
        )
        raise AuthorizationError(f"You can only {action} your own {name.lower()}s.")
    return resource
