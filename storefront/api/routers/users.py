# storefront/api/routers/users.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from storefront.api.deps import get_session_context, current_user
from storefront.data.database import get_db
from storefront.domain.errors import Unauthenticated, ValidationFailed
from storefront.domain.schemas import RegisterIn, LoginIn, UserRead, SessionUser
from storefront.services.session_context import SessionContext
from storefront.services.user_service import UserService

router = APIRouter(tags=["users"])


@router.post("/register", response_model=UserRead, status_code=201)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.register(payload)
    except ValidationFailed as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/login", response_model=SessionUser)
def login(
    payload: LoginIn,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    service = UserService(db)
    try:
        return service.login(ctx, payload)
    except Unauthenticated as e:
        raise HTTPException(status_code=401, detail=str(e))


@router.post("/logout", status_code=204)
def logout(
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    UserService(db).logout(ctx)


@router.get("/me", response_model=SessionUser)
def me(user: SessionUser = Depends(current_user)):
    return user
