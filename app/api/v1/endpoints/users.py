"""User endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.db.session import get_db
from app.schemas.user import UserCreate, UserListResponse, UserRead
from app.services import user_service

router: APIRouter = APIRouter()


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, db: Session = Depends(get_db)) -> UserRead:
    try:
        user = user_service.create_user(
            db,
            name=payload.name,
            email=payload.email,
            role=payload.role,
            user_id=payload.id,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return UserRead.model_validate(user)


@router.get("", response_model=UserListResponse)
def list_users(role: str = Query(default="CUSTOMER"), db: Session = Depends(get_db)) -> UserListResponse:
    try:
        users = user_service.list_users_by_role(db, role)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return UserListResponse(users=[UserRead.model_validate(user) for user in users], count=len(users))


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: str, db: Session = Depends(get_db)) -> UserRead:
    user = user_service.get_user_by_id(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return UserRead.model_validate(user)
