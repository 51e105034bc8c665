from typing import Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from storefront.db import get_db
from storefront.logging_config import get_logger
from storefront.models.user import User
from storefront.repositories.user_repo import UserRepository
from storefront.services.auth_service import AuthService
from storefront.services.errors import (
    NotFoundError,
    PersistenceError,
    StorefrontError,
    UnauthorizedError,
    ValidationError,
)
from storefront.services.product_service import ProductService
from storefront.utils.security import decode_access_token

log = get_logger("api")

# auto_error=False so a missing header is reported as 401, not 403
bearer = HTTPBearer(auto_error=False)


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(db, logger=get_logger("products"))


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db, logger=get_logger("auth"))


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the Bearer token to an active User.

    Raises 401 when the header is missing, the token does not verify, the
    user no longer exists, or the user has been deactivated.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")
    user_id = decode_access_token(credentials.credentials)
    if not user_id:
        raise _unauthorized("Token not valid")
    user = UserRepository(db).get_by_id(user_id)
    if not user:
        raise _unauthorized("Token not valid")
    if not user.is_active:
        raise _unauthorized("User is inactive, talk with an admin")
    return user


def require_roles(*roles: str) -> Callable[..., User]:
    """
    Dependency factory: the current user must hold at least one of `roles`.
    With no roles, any authenticated user passes.

        @router.post("", dependencies=[Depends(require_roles(ValidRoles.ADMIN))])
    """

    def _guard(user: User = Depends(get_current_user)) -> User:
        if roles and not user.has_any_role(*roles):
            log.info("user %s denied, needs one of %s", user.email, list(roles))
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"User {user.full_name} need a valid role: [{', '.join(roles)}]",
            )
        return user

    return _guard


def http_error(exc: StorefrontError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.detail)
    if isinstance(exc, UnauthorizedError):
        return _unauthorized(exc.detail)
    if isinstance(exc, PersistenceError):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unexpected error, check server logs",
        )
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
