from fastapi import APIRouter, Depends, status

from storefront.api.deps import get_auth_service, get_current_user, http_error, require_roles
from storefront.models.user import User, ValidRoles
from storefront.schemas.user_schema import (
    AuthResponse,
    UserCreate,
    UserLogin,
    UserOut,
    UserUpdate,
)
from storefront.services.auth_service import AuthService
from storefront.services.errors import StorefrontError

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_response(user: User, token: str) -> dict:
    return AuthResponse(**UserOut.model_validate(user).model_dump(), token=token).model_dump()


@router.post("/register", summary="Register user", status_code=status.HTTP_201_CREATED)
def register(body: UserCreate, svc: AuthService = Depends(get_auth_service)):
    try:
        user, token = svc.register(body)
    except StorefrontError as e:
        raise http_error(e)
    return _auth_response(user, token)


@router.post("/login", summary="Login")
def login(body: UserLogin, svc: AuthService = Depends(get_auth_service)):
    try:
        user, token = svc.login(body)
    except StorefrontError as e:
        raise http_error(e)
    return _auth_response(user, token)


@router.get("/check-status", summary="Refresh token for the current user")
def check_auth_status(
    user: User = Depends(get_current_user),
    svc: AuthService = Depends(get_auth_service),
):
    user, token = svc.check_auth_status(user)
    return _auth_response(user, token)


@router.get("", summary="List users")
def list_users(
    svc: AuthService = Depends(get_auth_service),
    _: User = Depends(require_roles(ValidRoles.ADMIN)),
):
    return [UserOut.model_validate(u).model_dump() for u in svc.find_all()]


@router.get("/private", summary="Super-user only route")
def private_route(user: User = Depends(require_roles(ValidRoles.SUPER_USER))):
    return {"ok": True, "user": UserOut.model_validate(user).model_dump()}


@router.patch("/{user_id}", summary="Update user")
def update_user(
    user_id: str,
    body: UserUpdate,
    svc: AuthService = Depends(get_auth_service),
    _: User = Depends(require_roles(ValidRoles.ADMIN)),
):
    try:
        user = svc.update(user_id, body)
    except StorefrontError as e:
        raise http_error(e)
    return UserOut.model_validate(user).model_dump()


@router.delete("/{user_id}", summary="Remove user", status_code=status.HTTP_204_NO_CONTENT)
def remove_user(
    user_id: str,
    svc: AuthService = Depends(get_auth_service),
    _: User = Depends(get_current_user),
):
    try:
        svc.remove(user_id)
    except StorefrontError as e:
        raise http_error(e)
