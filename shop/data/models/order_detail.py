import uuid

from sqlalchemy import Column, Integer, ForeignKey, Numeric, Uuid
from sqlalchemy.orm import relationship

from shop.data.database import Base


class OrderDetailModel(Base):
    __tablename__ = "order_details"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    order_id = Column(Uuid, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)

    # snapshot sumy cen z chwili zamowienia, nie przeliczany pozniej
    price = Column(Numeric(10, 2), nullable=False)

    order = relationship("OrderModel", back_populates="order_details")
    items = relationship(
        "OrderDetailProductModel",
        back_populates="order_detail",
        cascade="all, delete-orphan",
        order_by="OrderDetailProductModel.position",
    )

    @property
    def products(self):
        return [item.product for item in self.items]


class OrderDetailProductModel(Base):
    """Wiersz tabeli laczacej order_details <-> products, pozycja zachowuje kolejnosc z zamowienia."""

    __tablename__ = "order_detail_products"

    order_detail_id = Column(Uuid, ForeignKey("order_details.id", ondelete="CASCADE"), primary_key=True)
    position = Column(Integer, primary_key=True)
    product_id = Column(Uuid, ForeignKey("products.id"), nullable=False, index=True)

    order_detail = relationship("OrderDetailModel", back_populates="items")
    product = relationship("ProductModel")
