"""
User endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from ivrit.core.database import get_session
from ivrit.schemas.user import CreateUserRequest, UserResponse
from ivrit.services.user_service import create_user, get_user

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    request: CreateUserRequest,
    session: Session = Depends(get_session)
):
    """Register a learner."""
    user = create_user(session, request.username)
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
async def read_user(
    user_id: int,
    session: Session = Depends(get_session)
):
    """Get a learner with their streak and coin count."""
    return UserResponse.model_validate(get_user(session, user_id))
