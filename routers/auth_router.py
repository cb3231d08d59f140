from fastapi import APIRouter
from fastapi.responses import JSONResponse

from auth import authenticate_user
from models import LoginRequest, LoginResponse

router = APIRouter(tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
def login(request: LoginRequest):
    """Check email and password, return the matching account"""
    user = authenticate_user(request.email, request.password)
    if not user:
        return JSONResponse(
            status_code=401,
            content={"success": False, "message": "Invalid credentials"},
        )

    return LoginResponse(user=user)
