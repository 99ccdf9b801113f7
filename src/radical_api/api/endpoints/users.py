"""User and login endpoints for the Radical API."""

from fastapi import APIRouter, Request

from radical_api.api.dependencies import SessionDep
from radical_api.schemas.user import LoginRequest, LoginResponse, UserCreate, UserOut
from radical_api.services.users import attempt_login, create_or_get_user

router = APIRouter(tags=["users"])


@router.post("/users", response_model=UserOut)
async def create_user(payload: UserCreate, db: SessionDep) -> UserOut:
    """Create a user, or return the existing one with the same id."""
    user, created = create_or_get_user(db, payload.id, payload.name)
    return UserOut(id=user.id, name=user.name, created=created)


@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, request: Request, db: SessionDep) -> LoginResponse:
    """Log in with an emoji combination, signing up unseen combinations."""
    client_ip = request.headers.get("cf-connecting-ip") or (
        request.client.host if request.client else None
    )
    result = attempt_login(
        db,
        payload.emoji_combination,
        payload.selected_dictator,
        payload.selected_target,
        ip_address=client_ip,
    )
    return LoginResponse(
        is_new_user=result.is_new_user,
        user_id=result.user_id,
        username=result.username,
        message="Account created successfully" if result.is_new_user else "Login successful",
    )
