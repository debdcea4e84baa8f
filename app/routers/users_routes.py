# app/routers/users_routes.py

# Legacy user list kept in a JSON file, independent of the database users.

from typing import List

from fastapi import APIRouter, Depends

from app.core import parse_id
from app.legacy_users import JsonUserStore, get_user_store
from app.schemas import LegacyUser, LegacyUserInput, LegacyUserResponse, MessageResponse

router = APIRouter(
    prefix="/users",
    tags=["users"],
)


@router.get("", response_model=List[LegacyUser])
def list_users(users: JsonUserStore = Depends(get_user_store)):
    return users.read_users()


@router.get("/{user_id}", response_model=LegacyUser)
def get_user(
    user_id: str,
    users: JsonUserStore = Depends(get_user_store),
):
    return users.get(parse_id(user_id))


@router.post("", response_model=LegacyUserResponse, status_code=201)
def create_user(
    body: LegacyUserInput,
    users: JsonUserStore = Depends(get_user_store),
):
    user = users.create(body.model_dump())
    return {"message": "User created successfully", "user": user}


@router.put("/{user_id}", response_model=LegacyUserResponse)
def update_user(
    user_id: str,
    body: LegacyUserInput,
    users: JsonUserStore = Depends(get_user_store),
):
    user = users.update(parse_id(user_id), body.model_dump())
    return {"message": "User updated successfully", "user": user}


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    users: JsonUserStore = Depends(get_user_store),
):
    users.delete(parse_id(user_id))
    return {"message": "User deleted successfully"}
