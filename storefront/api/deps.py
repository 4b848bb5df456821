# storefront/api/deps.py
from fastapi import Depends, HTTPException, Request

from storefront.domain.schemas import SessionUser
from storefront.services.lock_service import LockService
from storefront.services.role_gate import RoleGate
from storefront.services.session_context import SessionContext
from storefront.services.storage import DiskStorage

_lock_service: LockService | None = None


def get_session_context(request: Request) -> SessionContext:
    return SessionContext(request.session)


def get_lock_service() -> LockService:
    global _lock_service
    if _lock_service is None:
        _lock_service = LockService()
    return _lock_service


def get_storage() -> DiskStorage:
    return DiskStorage()


def current_user(ctx: SessionContext = Depends(get_session_context)) -> SessionUser:
    user = ctx.current_user
    if user is None:
        raise HTTPException(status_code=401, detail="Login required")
    return user


def require_role(role: str):
    def checker(
        ctx: SessionContext = Depends(get_session_context),
        user: SessionUser = Depends(current_user),
    ) -> SessionUser:
        if not RoleGate.authorize(ctx, role):
            raise HTTPException(status_code=403, detail=f"Role '{role}' required")
        return user

    return checker
