"""FastAPI dependencies: unit of work and caller identity.

Authentication itself happens upstream; the gateway forwards the
authenticated caller as ``X-User-Id`` / ``X-User-Role`` headers.
"""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, Request, status

from candystore.domain.model.cart import UserIdentity
from candystore.domain.repository.unit_of_work import UnitOfWork


def get_uow(request: Request) -> UnitOfWork:
    return request.app.state.uow_factory()


def get_current_user(
    x_user_id: Annotated[Optional[str], Header()] = None,
    x_user_role: Annotated[Optional[str], Header()] = None,
) -> UserIdentity:
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return UserIdentity(id=x_user_id.strip(), role=(x_user_role or "customer").strip())


Uow = Annotated[UnitOfWork, Depends(get_uow)]
CurrentUser = Annotated[UserIdentity, Depends(get_current_user)]
