import uuid

from sqlalchemy import Column, String, Uuid
from sqlalchemy.orm import relationship

from shop.data.database import Base


class CategoryModel(Base):
    __tablename__ = "categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(50), nullable=False, unique=True)

    products = relationship("ProductModel", back_populates="category")
