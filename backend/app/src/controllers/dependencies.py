"""Request-scoped helpers shared by the routers."""

from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from src.repositories.crm.crud.users_crud import CRUDUser
from src.repositories.crm.dependencies import get_db
from src.services.errors import NotFoundError


def get_current_user_id(
    x_user_id: Optional[int] = Header(default=None, alias="X-User-Id"),
    db: Session = Depends(get_db),
    users: CRUDUser = Depends(),
) -> int:
    """
    Resolve the acting user.

    Authentication lives in front of this API; it forwards the user in the
    ``X-User-Id`` header. Without the header the first admin is used.
    """
    user = users.get(db, x_user_id) if x_user_id is not None else users.get_first_admin(db)
    if user is None:
        raise NotFoundError("User not found")
    user_id: int = user.id
    return user_id
