from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
# at least one uppercase, one lowercase and one digit or symbol
PASSWORD_PATTERN = r"^(?=.*[A-Z])(?=.*[a-z])(?=.*[\d\W]).*$"
# bcrypt only looks at (and bcrypt>=5 rejects past) the first 72 bytes
BCRYPT_MAX_BYTES = 72


class UserCreate(BaseModel):
    model_config = ConfigDict(regex_engine="python-re")

    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6, max_length=50, pattern=PASSWORD_PATTERN)
    full_name: str = Field(min_length=1)

    @field_validator("password")
    @classmethod
    def _fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"password must be at most {BCRYPT_MAX_BYTES} bytes in UTF-8")
        return v


class UserLogin(BaseModel):
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6, max_length=50)


class UserUpdate(BaseModel):
    full_name: Optional[str] = Field(default=None, min_length=1)
    is_active: Optional[bool] = None
    roles: Optional[List[str]] = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    email: str
    full_name: str
    is_active: bool
    roles: List[str]


class AuthResponse(UserOut):
    token: str
