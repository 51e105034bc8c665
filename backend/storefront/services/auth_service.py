import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.models.user import User
from storefront.repositories.user_repo import UserRepository
from storefront.schemas.user_schema import UserCreate, UserLogin, UserUpdate
from storefront.services.errors import (
    NotFoundError,
    StorefrontError,
    UnauthorizedError,
    ValidationError,
    translate_db_error,
)
from storefront.utils.security import create_access_token, hash_password, verify_password
from storefront.utils.transactions import unit_of_work

INVALID_CREDENTIALS = "Credentials are not valid (email|password)"


class AuthService:
    def __init__(self, db: Session, logger: Optional[logging.Logger] = None):
        self.db = db
        self.repo = UserRepository(db)
        self.log = logger or logging.getLogger("storefront.auth")

    def register(self, data: UserCreate) -> Tuple[User, str]:
        try:
            with unit_of_work(self.db):
                user = User(
                    email=data.email.lower().strip(),
                    password=hash_password(data.password),
                    full_name=data.full_name,
                )
                self.repo.add(user)
        except SQLAlchemyError as exc:
            raise self._handle_db_exception(exc) from exc
        self.log.info("registered user %s", user.email)
        return user, create_access_token(user.id)

    def login(self, data: UserLogin) -> Tuple[User, str]:
        user = self.repo.get_by_email(data.email.lower().strip())
        if not user or not verify_password(data.password, user.password):
            raise UnauthorizedError(INVALID_CREDENTIALS)
        return user, create_access_token(user.id)

    def check_auth_status(self, user: User) -> Tuple[User, str]:
        return user, create_access_token(user.id)

    def find_all(self) -> List[User]:
        return self.repo.list()

    def find_one(self, user_id: str) -> User:
        user = self.repo.get_by_id(user_id)
        if not user:
            raise NotFoundError(user_id, entity="User")
        return user

    def update(self, user_id: str, data: UserUpdate) -> User:
        user = self.find_one(user_id)
        try:
            with unit_of_work(self.db):
                for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
                    setattr(user, field, value)
                self.db.flush()
        except SQLAlchemyError as exc:
            raise self._handle_db_exception(exc) from exc
        return user

    def remove(self, user_id: str):
        user = self.find_one(user_id)
        try:
            with unit_of_work(self.db):
                self.repo.remove(user)
        except SQLAlchemyError as exc:
            raise self._handle_db_exception(exc) from exc
        self.log.info("removed user %s", user_id)

    def _handle_db_exception(self, exc: SQLAlchemyError) -> StorefrontError:
        err = translate_db_error(exc)
        if not isinstance(err, ValidationError):
            self.log.error("database error: %s", exc)
        return err
