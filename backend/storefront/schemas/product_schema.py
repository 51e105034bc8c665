from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storefront.utils.identifiers import slugify

Gender = Literal["men", "women", "kid", "unisex"]


def _check_title(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not slugify(v):
        raise ValueError("title must contain at least one slug character")
    return v


def _check_slug(v: Optional[str]) -> Optional[str]:
    # None means "derive from title"; anything sent must survive normalisation
    if v is not None and not slugify(v):
        raise ValueError("slug must not be empty")
    return v


class ProductCreate(BaseModel):
    title: str = Field(min_length=1)
    price: float = Field(default=0, ge=0)
    description: Optional[str] = None
    slug: Optional[str] = None
    stock: int = Field(default=0, ge=0)
    sizes: List[str]
    gender: Gender
    tags: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)

    _title = field_validator("title")(_check_title)
    _slug = field_validator("slug")(_check_slug)


class ProductUpdate(BaseModel):
    """
    Partial update. Only fields present in the request body are applied;
    `images`, when present (even as []), replaces the whole image set.
    """

    title: Optional[str] = Field(default=None, min_length=1)
    price: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None
    slug: Optional[str] = None
    stock: Optional[int] = Field(default=None, ge=0)
    sizes: Optional[List[str]] = None
    gender: Optional[Gender] = None
    tags: Optional[List[str]] = None
    images: Optional[List[str]] = None

    _title = field_validator("title")(_check_title)
    _slug = field_validator("slug")(_check_slug)

    def scalar_changes(self) -> dict:
        changes = self.model_dump(exclude_unset=True)
        changes.pop("images", None)
        # explicit nulls for NOT NULL columns are treated as "not sent"
        return {
            k: v for k, v in changes.items() if v is not None or k == "description"
        }

    def image_urls(self) -> Optional[List[str]]:
        if "images" not in self.model_fields_set or self.images is None:
            return None
        return list(self.images)


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    title: str
    price: float
    description: Optional[str] = None
    slug: str
    stock: int
    sizes: List[str]
    gender: str
    tags: List[str]
    images: List[str] = Field(default_factory=list)

    @field_validator("images", mode="before")
    @classmethod
    def _image_urls(cls, v):
        return [getattr(img, "url", img) for img in (v or [])]


class PaginationParams(BaseModel):
    limit: int = Field(default=10, ge=1)
    offset: int = Field(default=0, ge=0)
