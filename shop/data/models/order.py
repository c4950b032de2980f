import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, ForeignKey, DateTime, Uuid
from sqlalchemy.orm import relationship

from shop.data.database import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    user = relationship("UserModel", back_populates="orders")
    order_details = relationship(
        "OrderDetailModel",
        back_populates="order",
        cascade="all, delete-orphan",
    )
