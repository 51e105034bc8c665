from sqlalchemy import JSON, Column, Float, ForeignKey, Integer, String, Text, event
from sqlalchemy.orm import relationship

from storefront.db import Base
from storefront.models.user import User  # noqa: F401
from storefront.utils.identifiers import new_id, slugify


def _empty_list():
    return []


class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(256), unique=True, nullable=False)
    price = Column(Float, nullable=False, default=0)
    description = Column(Text, nullable=True)
    slug = Column(String(256), unique=True, index=True, nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    sizes = Column(JSON, nullable=False, default=_empty_list)
    gender = Column(String(32), nullable=False)
    tags = Column(JSON, nullable=False, default=_empty_list)
    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )

    images = relationship(
        "ProductImage",
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProductImage.id",
    )
    user = relationship("User", backref="products")

    def __repr__(self):
        return f"<Product slug={self.slug} title={self.title}>"


class ProductImage(Base):
    __tablename__ = "product_images"

    id = Column(Integer, primary_key=True, autoincrement=True)
    url = Column(String(1024), nullable=False)
    product_id = Column(
        String(36),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    product = relationship("Product", back_populates="images")


@event.listens_for(Product, "before_insert")
def _slug_before_insert(mapper, connection, target):
    target.slug = slugify(target.slug or target.title)


@event.listens_for(Product, "before_update")
def _slug_before_update(mapper, connection, target):
    target.slug = slugify(target.slug or target.title)
