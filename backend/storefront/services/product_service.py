import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.models.product import Product
from storefront.models.user import User
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.product_schema import ProductCreate, ProductUpdate
from storefront.services.errors import (
    NotFoundError,
    StorefrontError,
    ValidationError,
    translate_db_error,
)
from storefront.utils.identifiers import is_uuid, normalize_uuid
from storefront.utils.transactions import unit_of_work


class ProductService:
    def __init__(self, db: Session, logger: Optional[logging.Logger] = None):
        self.db = db
        self.repo = ProductRepository(db)
        self.log = logger or logging.getLogger("storefront.products")

    def create(self, data: ProductCreate, user: Optional[User] = None) -> Product:
        """
        Insert a product together with its images. Either the product and all
        of its image rows are committed, or nothing is.
        """
        fields = data.model_dump(exclude={"images"})
        try:
            with unit_of_work(self.db):
                product = self.repo.build(fields, data.images)
                if user is not None:
                    product.user_id = user.id
                self.repo.add(product)
        except SQLAlchemyError as exc:
            raise self._handle_db_exception(exc) from exc
        self.log.info("created product %s (%d images)", product.slug, len(data.images))
        return product

    def find_all(self, limit: int = 10, offset: int = 0) -> List[Product]:
        return self.repo.list(limit=limit, offset=offset)

    def find_one(self, term: str) -> Product:
        """
        Resolve a product by UUID primary key or, failing the UUID format test,
        by slug. Both branches return the product with its images loaded.
        """
        if is_uuid(term):
            product = self.repo.get_by_id(normalize_uuid(term))
        else:
            product = self.repo.get_by_slug(term)
        if not product:
            raise NotFoundError(term)
        return product

    def update(self, product_id: str, patch: ProductUpdate) -> Product:
        changes = patch.scalar_changes()
        image_urls = patch.image_urls()

        product = self._preload(product_id, changes)

        try:
            with unit_of_work(self.db):
                if image_urls is not None:
                    self._replace_images(product, image_urls)
                self.db.flush()
        except SQLAlchemyError as exc:
            raise self._handle_db_exception(exc) from exc

        self.db.refresh(product)
        self.log.info(
            "updated product %s fields=%s images=%s",
            product.id,
            sorted(changes),
            "replaced" if image_urls is not None else "kept",
        )
        return product

    def remove(self, term: str):
        product = self.find_one(term)
        try:
            with unit_of_work(self.db):
                self.repo.remove(product)
        except SQLAlchemyError as exc:
            raise self._handle_db_exception(exc) from exc
        self.log.info("removed product %s", term)

    def delete_all(self) -> int:
        try:
            with unit_of_work(self.db):
                deleted = self.repo.delete_all()
        except SQLAlchemyError as exc:
            raise self._handle_db_exception(exc) from exc
        self.log.warning("deleted all products (%d)", deleted)
        return deleted

    def _preload(self, product_id: str, changes: dict) -> Product:
        """Load the stored product and apply only the fields present in `changes`."""
        product = self.repo.get_by_id(normalize_uuid(product_id)) if is_uuid(product_id) else None
        if not product:
            raise NotFoundError(product_id)
        for field, value in changes.items():
            setattr(product, field, value)
        return product

    def _replace_images(self, product: Product, image_urls: List[str]):
        self.repo.delete_images(product.id)
        # the loaded collection still holds the deleted rows; reload it (now empty)
        # on assignment instead of letting delete-orphan delete them a second time
        self.db.expire(product, ["images"])
        product.images = self.repo.build_images(image_urls)

    def _handle_db_exception(self, exc: SQLAlchemyError) -> StorefrontError:
        err = translate_db_error(exc)
        if isinstance(err, ValidationError):
            self.log.info("unique constraint violated: %s", err.detail)
        else:
            self.log.error("database error: %s", exc)
        return err
