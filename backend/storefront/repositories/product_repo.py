from typing import Iterable, List, Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from storefront.models.product import Product, ProductImage


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def build(self, fields: dict, image_urls: Iterable[str] = ()) -> Product:
        """Create an unsaved Product with one ProductImage per url, order kept."""
        return Product(**fields, images=self.build_images(image_urls))

    def build_images(self, image_urls: Iterable[str]) -> List[ProductImage]:
        return [ProductImage(url=url) for url in image_urls]

    def get_by_id(self, product_id: str) -> Optional[Product]:
        return (
            self.db.query(Product)
            .options(selectinload(Product.images))
            .filter(Product.id == product_id)
            .first()
        )

    def get_by_slug(self, slug: str) -> Optional[Product]:
        # LEFT OUTER JOIN product_images, one round trip
        return (
            self.db.query(Product)
            .options(joinedload(Product.images))
            .filter(Product.slug == slug)
            .first()
        )

    def list(self, limit: int = 10, offset: int = 0) -> List[Product]:
        return (
            self.db.query(Product)
            .options(selectinload(Product.images))
            .order_by(Product.title)
            .offset(offset)
            .limit(limit)
            .all()
        )

    def delete_images(self, product_id: str) -> int:
        return (
            self.db.query(ProductImage)
            .filter(ProductImage.product_id == product_id)
            .delete(synchronize_session=False)
        )

    def add(self, product: Product) -> Product:
        self.db.add(product)
        self.db.flush()
        return product

    def remove(self, product: Product):
        self.db.delete(product)
        self.db.flush()

    def delete_all(self) -> int:
        self.db.query(ProductImage).delete(synchronize_session=False)
        return self.db.query(Product).delete(synchronize_session=False)
