"""
SQLAlchemy Database Models

Users, menu items and orders. Field-level rules that must hold no matter
which code path writes a row (lowercased names, the two-valued role,
required identifying fields) are enforced here with ``@validates``.
"""

import enum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import validates
from sqlalchemy.sql import func

from foodorder.database import Base

# Upper bound of an Integer primary key (32-bit on PostgreSQL)
MAX_ID = 2_147_483_647


class Role(str, enum.Enum):
    """Authorization tier."""
    USER = "User"
    ADMIN = "Admin"

    @classmethod
    def parse(cls, value: "Role | str") -> "Role":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = [r.value for r in cls]
            raise ValueError(f"Invalid role {value!r}. Must be one of: {valid}")


def _require_text(field: str, value: str | None) -> str:
    text = (value or "").strip()
    if not text:
        raise ValueError(f"{field} is required")
    return text


class User(Base):
    """
    Registered account.

    Only the password hash is stored; the plaintext never reaches this table.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(
        Enum(Role, name="user_role", values_callable=lambda e: [r.value for r in e]),
        default=Role.USER,
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @validates("name")
    def _normalize_name(self, key, value):
        return _require_text("name", value).lower()

    @validates("email")
    def _normalize_email(self, key, value):
        return _require_text("email", value).lower()

    @validates("role")
    def _validate_role(self, key, value):
        return Role.parse(value)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def __repr__(self):
        return f"<User #{self.id} - {self.email} - {self.role}>"


class MenuItem(Base):
    """A restaurant's offering. Not owned by any user."""
    __tablename__ = "menus"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    restaurant = Column(String(100), nullable=False)
    food = Column(String(100), nullable=True)
    drink = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    @validates("restaurant")
    def _validate_restaurant(self, key, value):
        return _require_text("restaurant", value)

    def __repr__(self):
        return f"<MenuItem #{self.id} - {self.restaurant}>"


class Order(Base):
    """
    An order placed by an authenticated user.

    ``owner`` is the display name given with the order; ``user_id`` is the
    account that placed it.
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    owner = Column(String(100), nullable=False)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    restaurant = Column(String(100), nullable=True)
    food = Column(String(100), nullable=True)
    drink = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    @validates("owner")
    def _validate_owner(self, key, value):
        return _require_text("owner", value)

    def __repr__(self):
        return f"<Order #{self.id} - {self.owner} - {self.restaurant}>"
