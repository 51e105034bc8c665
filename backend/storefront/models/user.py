from sqlalchemy import JSON, Boolean, Column, String

from storefront.db import Base
from storefront.utils.identifiers import new_id


class ValidRoles:
    ADMIN = "admin"
    SUPER_USER = "super-user"
    USER = "user"


def _default_roles():
    return [ValidRoles.USER]


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(256), unique=True, index=True, nullable=False)
    password = Column(String(128), nullable=False)  # bcrypt hash, never returned
    full_name = Column(String(256), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    roles = Column(JSON, nullable=False, default=_default_roles)

    def has_any_role(self, *roles: str) -> bool:
        return any(r in (self.roles or []) for r in roles)

    def __repr__(self):
        return f"<User email={self.email}>"
