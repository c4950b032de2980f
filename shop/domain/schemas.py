# shop/domain/schemas.py
import re
from datetime import datetime
from decimal import Decimal
from typing import Annotated, List
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, model_validator
from pydantic.alias_generators import to_camel

# litery, cyfry i spacje
ALNUM_PATTERN = r"^[a-zA-Z0-9\s]+$"

PASSWORD_RE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[!@#$%^&*])[A-Za-z\d!@#$%^&*]{8,15}$")
PASSWORD_RULES = (
    "Password must be between 8 and 15 characters, with at least one uppercase letter, "
    "one lowercase letter, one number, and one special character (!@#$%^&*)"
)


class CamelModel(BaseModel):
    """JSON w camelCase, w Pythonie snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _check_password(value: str | None) -> str | None:
    if value is not None and not PASSWORD_RE.match(value):
        raise ValueError(PASSWORD_RULES)
    return value


def _check_email_length(value: str | None) -> str | None:
    if value is not None and len(value) > 50:
        raise ValueError("Email must be at most 50 characters long")
    return value


Email = Annotated[EmailStr, AfterValidator(_check_email_length)]
Password = Annotated[str, Field(min_length=1, max_length=60), AfterValidator(_check_password)]


# ---------- users ----------

class UserCreate(CamelModel):
    """Schema dla tworzenia uzytkownika, wszystkie bledy pol zwracane naraz."""

    name: str = Field(..., min_length=1, max_length=50, pattern=ALNUM_PATTERN)
    email: Email
    password: Password
    confirm_password: str = Field(..., min_length=1, max_length=60)
    phone: int
    country: str = Field(..., min_length=1, max_length=50, pattern=ALNUM_PATTERN)
    address: str = Field(..., min_length=1, pattern=ALNUM_PATTERN)
    city: str = Field(..., min_length=1, max_length=50, pattern=ALNUM_PATTERN)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Password and confirmPassword must match")
        return self


class UserUpdate(CamelModel):
    """Czesciowa aktualizacja, pomijane pola zostaja bez zmian."""

    name: str | None = Field(None, min_length=1, max_length=50, pattern=ALNUM_PATTERN)
    email: Email | None = None
    password: Password | None = None
    confirm_password: str | None = Field(None, min_length=1, max_length=60)
    phone: int | None = None
    country: str | None = Field(None, min_length=1, max_length=50, pattern=ALNUM_PATTERN)
    address: str | None = Field(None, min_length=1, pattern=ALNUM_PATTERN)
    city: str | None = Field(None, min_length=1, max_length=50, pattern=ALNUM_PATTERN)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password is not None and self.password != self.confirm_password:
            raise ValueError("Password and confirmPassword must match")
        return self


class UserRead(CamelModel):
    id: UUID
    name: str
    email: str
    phone: int
    country: str
    address: str
    city: str


class OrderedProductOut(CamelModel):
    name: str
    img_url: str


class UserOrderDetailOut(CamelModel):
    price: Decimal
    products: List[OrderedProductOut]


class UserOrderOut(CamelModel):
    id: UUID
    date: datetime
    order_details: List[UserOrderDetailOut]


class UserWithOrders(UserRead):
    """Uzytkownik na liscie, razem z tym co zamowil."""

    orders: List[UserOrderOut] = []


# ---------- catalog ----------

class CategoryRead(CamelModel):
    id: UUID
    name: str


class ProductCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=50)
    description: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    stock: int = Field(..., ge=0)
    img_url: str | None = None
    category: UUID = Field(..., description="ID kategorii")


class ProductUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=50)
    description: str | None = Field(None, min_length=1)
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    stock: int | None = Field(None, ge=0)
    img_url: str | None = None
    category: UUID | None = None


class OrderProductOut(CamelModel):
    id: UUID
    name: str
    description: str
    price: Decimal
    stock: int
    img_url: str


class ProductRead(OrderProductOut):
    category: CategoryRead | None = None


# ---------- orders ----------

class ProductRef(CamelModel):
    # ID sprawdzane pozycyjnie w OrderService, nie tutaj
    id: str = Field(..., min_length=1)


class OrderCreate(CamelModel):
    """Schema dla skladania zamowienia."""

    user_id: UUID
    products: List[ProductRef] = Field(..., min_length=1)


class OrderPlacedOut(CamelModel):
    order_id: UUID
    order_date: datetime
    total_price: Decimal
    order_detail_id: UUID


class OrderDetailOut(CamelModel):
    id: UUID
    price: Decimal
    products: List[OrderProductOut]


class OrderOut(CamelModel):
    id: UUID
    date: datetime
    order_details: List[OrderDetailOut]


class MessageOut(BaseModel):
    message: str
