# app/routers/auth_routes.py

from fastapi import APIRouter, Depends

from app.auth import get_current_user
from app.credentials import register_user, login_user
from app.repository import Store, get_store
from app.schemas import RegisterRequest, LoginRequest, Token, UserPublic, Identity, to_user_public

router = APIRouter(
    tags=["auth"],
)


@router.post("/register", response_model=UserPublic, status_code=201)
def register(
    body: RegisterRequest,
    store: Store = Depends(get_store),
):
    user = register_user(store, body.email, body.password, body.name, body.phone)
    return to_user_public(user)


@router.post("/login", response_model=Token)
def login(
    body: LoginRequest,
    store: Store = Depends(get_store),
):
    token = login_user(store, body.email, body.password)
    return {"token": token, "token_type": "bearer"}


@router.get("/protected-route")
def protected_route(current_user: dict = Depends(get_current_user)):
    return {"message": f"This is a protected route. User: {current_user['id']}"}


@router.get("/me", response_model=Identity)
def me(current_user: dict = Depends(get_current_user)):
    return current_user
