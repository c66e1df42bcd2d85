# product_api/app/models.py

"""
SQLAlchemy database models for the Product API.
"""

from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String
from sqlalchemy.sql import func

from .db import Base


class Product(Base):
    """
    SQLAlchemy model for the 'products' table.
    A product is a name, a strictly positive price and an availability flag.
    """

    __tablename__ = "products"

    # Auto-incrementing primary key, never changed after insert.
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    name = Column(String(255), nullable=False)

    # Numeric with 10 total digits and 2 decimal places.
    price = Column(Numeric(10, 2), nullable=False)

    availability = Column(Boolean, nullable=False, default=True)

    # 'created_at' is stamped on insert, 'updated_at' on every update.
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return (
            f"<Product(id={self.id}, name='{self.name}', "
            f"price={self.price}, availability={self.availability})>"
        )
