from fastapi import APIRouter, Depends, HTTPException, status

from app.core.dependencies import get_current_user, get_user_repository
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.services.auth_service import auth_service
from app.schemas.auth import UserLogin, UserRegister, AuthResponse
from app.schemas.user import UserRead

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=AuthResponse)
async def register(user: UserRegister, repo: UserRepository = Depends(get_user_repository)):
    """Регистрация нового пользователя и выдача JWT токена"""
    new_user = await auth_service.register_user(repo, user)

    return AuthResponse(
        token=auth_service.issue_token(new_user),
        user=UserRead.model_validate(new_user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(user: UserLogin, repo: UserRepository = Depends(get_user_repository)):
    """Аутентификация пользователя и выдача JWT токена"""
    authenticated_user = await auth_service.authenticate_user(repo, user)
    if not authenticated_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid credentials",
        )

    return AuthResponse(
        token=auth_service.issue_token(authenticated_user),
        user=UserRead.model_validate(authenticated_user),
    )


@router.get("/me", response_model=UserRead)
async def me(current_user: User = Depends(get_current_user)):
    return current_user
