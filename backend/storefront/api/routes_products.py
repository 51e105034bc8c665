from fastapi import APIRouter, Depends, Query, status

from storefront.api.deps import get_product_service, http_error, require_roles
from storefront.config import settings
from storefront.models.user import User, ValidRoles
from storefront.schemas.product_schema import ProductCreate, ProductOut, ProductUpdate
from storefront.services.errors import StorefrontError
from storefront.services.product_service import ProductService

router = APIRouter(tags=["products"])


@router.post("", summary="Create product", status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductCreate,
    svc: ProductService = Depends(get_product_service),
    user: User = Depends(require_roles(ValidRoles.ADMIN)),
):
    try:
        product = svc.create(body, user=user)
    except StorefrontError as e:
        raise http_error(e)
    return ProductOut.model_validate(product).model_dump()


@router.get("", summary="List products")
def list_products(
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1),
    offset: int = Query(0, ge=0),
    svc: ProductService = Depends(get_product_service),
):
    items = svc.find_all(limit=limit, offset=offset)
    return [ProductOut.model_validate(p).model_dump() for p in items]


@router.get("/{term}", summary="Get product by id or slug")
def get_product(term: str, svc: ProductService = Depends(get_product_service)):
    try:
        product = svc.find_one(term)
    except StorefrontError as e:
        raise http_error(e)
    return ProductOut.model_validate(product).model_dump()


@router.patch("/{product_id}", summary="Update product")
def update_product(
    product_id: str,
    body: ProductUpdate,
    svc: ProductService = Depends(get_product_service),
    _: User = Depends(require_roles(ValidRoles.ADMIN)),
):
    try:
        product = svc.update(product_id, body)
    except StorefrontError as e:
        raise http_error(e)
    return ProductOut.model_validate(product).model_dump()


@router.delete(
    "/{term}", summary="Remove product", status_code=status.HTTP_204_NO_CONTENT
)
def remove_product(
    term: str,
    svc: ProductService = Depends(get_product_service),
    _: User = Depends(require_roles(ValidRoles.ADMIN)),
):
    try:
        svc.remove(term)
    except StorefrontError as e:
        raise http_error(e)
