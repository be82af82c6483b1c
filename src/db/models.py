# dataclass models, with the JSON shapes kept in the store

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    image: str
    price: str  # display string, e.g. "$99.99"
    category: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "image": self.image,
            "price": self.price,
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Product:
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            image=str(data.get("image", "")),
            price=str(data.get("price", "")),
            category=str(data.get("category", "")),
        )


@dataclass(frozen=True)
class User:
    id: int
    username: str
    full_name: str
    email: str
    mobile_phone: str
    password_hash: str
    created_at: datetime
    is_admin: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "fullName": self.full_name,
            "email": self.email,
            "mobilePhone": self.mobile_phone,
            "passwordHash": self.password_hash,
            "createdAt": self.created_at.isoformat(),
            "isAdmin": self.is_admin,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> User:
        return cls(
            id=int(data["id"]),
            username=str(data["username"]),
            full_name=str(data["fullName"]),
            email=str(data["email"]),
            mobile_phone=str(data.get("mobilePhone", "")),
            password_hash=str(data.get("passwordHash", "")),
            created_at=datetime.fromisoformat(data["createdAt"]),
            is_admin=bool(data.get("isAdmin", False)),
        )


@dataclass(frozen=True)
class CartEntry:
    product: Product  # snapshot taken when first added
    quantity: int

    @property
    def product_id(self) -> str:
        return self.product.id

    def with_quantity(self, quantity: int) -> CartEntry:
        return replace(self, quantity=quantity)

    def to_dict(self) -> Dict[str, Any]:
        return {**self.product.to_dict(), "quantity": self.quantity}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CartEntry:
        return cls(product=Product.from_dict(data), quantity=int(data["quantity"]))


@dataclass(frozen=True)
class Session:
    current_user_id: Optional[int]
    current_username: Optional[str]
    logged_in_flag: bool
