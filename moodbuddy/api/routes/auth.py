"""
Authentication routes for registration, login and account management.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from moodbuddy.db.session import get_db
from moodbuddy.schemas.user import (
    UserCreate, UserLogin, UserUpdate, PasswordChange, UserResponse, AuthResponse
)
from moodbuddy.models.user import User
from moodbuddy.api.dependencies import get_current_user
from moodbuddy.core.utils import success_response
from moodbuddy.services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user and log them in."""
    user = auth_service.register_user(user_data, db)
    auth = AuthResponse(user=UserResponse.from_user(user), access_token=auth_service.issue_token(user))
    return success_response(auth.model_dump(mode="json"), message="User registered successfully")


@router.post("/login")
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login and get JWT token."""
    user, token = auth_service.authenticate_user(credentials.email, credentials.password, db)
    auth = AuthResponse(user=UserResponse.from_user(user), access_token=token)
    return success_response(auth.model_dump(mode="json"), message="Login successful")


@router.get("/me")
async def get_me(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return success_response(UserResponse.from_user(current_user).model_dump(mode="json"))


@router.put("/profile")
async def update_profile(
    update: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update profile and settings."""
    user = auth_service.update_profile(current_user, update, db)
    return success_response(
        UserResponse.from_user(user).model_dump(mode="json"),
        message="Profile updated successfully"
    )


@router.put("/change-password")
async def change_password(
    passwords: PasswordChange,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Rotate the password. The current one must be supplied."""
    auth_service.change_password(current_user, passwords.current_password, passwords.new_password, db)
    return success_response(message="Password changed successfully")


@router.put("/deactivate")
async def deactivate(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Deactivate the account. Existing tokens stop working."""
    auth_service.deactivate_user(current_user, db)
    return success_response(message="Account deactivated successfully")
