"""
Authentication Routes
Register, login, logout, profile and password change
"""

from fastapi import APIRouter, HTTPException, Response, status, Depends
from eventsphere.auth import create_user_token, set_auth_cookie, clear_auth_cookie, get_current_user
from eventsphere.schemas.auth import RegisterRequest, LoginRequest, ChangePasswordRequest, AuthResponse, UserResponse
from eventsphere.services.user_service import user_service

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(data: RegisterRequest, response: Response):
    """
    Create a participant or organizer account

    Participants are signed in immediately. Organizers wait for admin approval
    and receive no token until then.
    """
    user = await user_service.register(data)

    if not user["is_approved"]:
        return {
            "message": "Registration successful. Your organizer account is pending approval from an administrator.",
            "user": user,
            "requires_approval": True,
        }

    token = create_user_token(user)
    set_auth_cookie(response, token)
    return {"message": "Registration successful", "user": user, "token": token}


@router.post("/login", response_model=AuthResponse)
async def login(credentials: LoginRequest, response: Response):
    """
    Login for every role

    Sets the httpOnly auth cookie and also returns the token for bearer use.
    """
    user = await user_service.authenticate(credentials.email, credentials.password)

    token = create_user_token(user)
    set_auth_cookie(response, token)
    return {"message": "Login successful", "user": user, "token": token}


@router.post("/logout")
async def logout(response: Response):
    """Clear the auth cookie"""
    clear_auth_cookie(response)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: dict = Depends(get_current_user)):
    """Current user's profile"""
    user = await user_service.get_user(current_user["user_id"])
    if not user or not user["is_active"]:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user


@router.post("/change-password")
async def change_password(
    request: ChangePasswordRequest,
    current_user: dict = Depends(get_current_user)
):
    """Change the current user's password"""
    await user_service.change_password(
        current_user["user_id"],
        request.current_password,
        request.new_password,
        request.confirm_password
    )
    return {"message": "Password changed successfully"}
