"""Database models."""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Float, Boolean, Text, JSON
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class User(Base):
    """User profile model."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    display_name = Column(String, nullable=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    role = Column(String, default="customer", nullable=False)  # customer, merchant, admin
    password_hash = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Restaurant(Base):
    """Restaurant model."""

    __tablename__ = "restaurants"

    id = Column(String, primary_key=True, index=True)
    owner_id = Column(String, index=True, nullable=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    cuisine_type = Column(String, nullable=True)
    address = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    image = Column(String, nullable=True)
    rating = Column(Float, default=0.0, nullable=False)
    review_count = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class MenuItem(Base):
    """Menu item model."""

    __tablename__ = "menu_items"

    id = Column(String, primary_key=True, index=True)
    restaurant_id = Column(String, index=True, nullable=False)
    name = Column(String, nullable=False)
    category = Column(String, nullable=True)
    price = Column(Float, nullable=False)
    description = Column(Text, nullable=True)
    image = Column(String, nullable=True)
    available = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Order(Base):
    """Order model."""

    __tablename__ = "orders"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, index=True, nullable=False)
    customer_name = Column(String, nullable=False)
    customer_phone = Column(String, nullable=False)
    restaurant_id = Column(String, index=True, nullable=False)
    restaurant_name = Column(String, nullable=True)
    items = Column(JSON, nullable=False)  # Snapshot of cart items at checkout
    total = Column(Float, nullable=True)
    status = Column(String, default="pending", nullable=False)
    is_reviewed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Review(Base):
    """Review model."""

    __tablename__ = "reviews"

    id = Column(String, primary_key=True, index=True)
    order_id = Column(String, index=True, nullable=False)
    restaurant_id = Column(String, index=True, nullable=False)
    user_id = Column(String, index=True, nullable=False)
    user_name = Column(String, nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    reply = Column(Text, nullable=True)
    replied_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


# Collection name -> model, keyed the way documents are addressed by services
COLLECTIONS = {
    "users": User,
    "restaurants": Restaurant,
    "menuItems": MenuItem,
    "orders": Order,
    "reviews": Review,
}
