import uuid

from sqlalchemy import Column, String, Text, Boolean, BigInteger, Uuid
from sqlalchemy.orm import relationship

from shop.data.database import Base


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(50), nullable=False)
    email = Column(String(50), nullable=False, unique=True, index=True)
    # bcrypt digest, nigdy nie wraca w odpowiedzi
    password = Column(String(60), nullable=False)
    phone = Column(BigInteger, nullable=False)
    country = Column(String(50), nullable=False)
    address = Column(Text, nullable=False)
    city = Column(String(50), nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False)

    orders = relationship("OrderModel", back_populates="user", order_by="OrderModel.date")
