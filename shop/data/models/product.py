import uuid

from sqlalchemy import Column, Integer, String, Text, Numeric, ForeignKey, CheckConstraint, Uuid
from sqlalchemy.orm import relationship

from shop.data.database import Base
from shop.utils.settings import DEFAULT_PRODUCT_IMAGE


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(50), nullable=False, unique=True)
    description = Column(Text, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, nullable=False)
    img_url = Column(String, nullable=False, default=DEFAULT_PRODUCT_IMAGE)
    category_id = Column(Uuid, ForeignKey("categories.id"), nullable=True)

    category = relationship("CategoryModel", back_populates="products")

    __table_args__ = (CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),)
