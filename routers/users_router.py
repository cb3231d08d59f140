import sqlite3

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from database import create_user, delete_user, list_users
from models import RegisterResponse, UserCreate, UserListResponse

router = APIRouter(prefix="/users", tags=["User Management"])


@router.post("/register", response_model=RegisterResponse)
def register_user(payload: dict = Body(...)):
    """Create a staff account; the email must not be registered yet"""
    try:
        user_data = UserCreate.model_validate(payload)
        user = create_user(user_data)
    except (ValidationError, sqlite3.IntegrityError) as exc:
        return JSONResponse(status_code=400, content={"success": False, "error": str(exc)})

    return RegisterResponse(user=user)


@router.get("", response_model=UserListResponse)
def get_users():
    return UserListResponse(data=list_users())


@router.delete("/{user_id}")
def remove_user(user_id: str):
    # No existence check: unknown ids still report success
    delete_user(user_id)
    return {"success": True}
