# product_api/app/repository.py

"""
Product persistence behind a repository interface.
Handlers only talk to ProductRepository; the SQLAlchemy implementation is
the one wired in by default, and tests may substitute their own.
"""
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .db import get_db
from .models import Product

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """Raised when the backing store could not complete a write."""


class ProductRepository(ABC):

    @abstractmethod
    def list_all(self) -> List[Product]:
        """Return every product, ordered by id."""

    @abstractmethod
    def get(self, product_id: int) -> Optional[Product]:
        """Return a product by its id, or None if not found."""

    @abstractmethod
    def add(self, product: Product) -> Product:
        """Persist a new product and return it with its id assigned."""

    @abstractmethod
    def save(self, product: Product) -> Product:
        """Persist changes made to an existing product."""

    @abstractmethod
    def delete(self, product: Product) -> None:
        """Remove a product."""


class SqlAlchemyProductRepository(ProductRepository):
    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> List[Product]:
        return self.db.query(Product).order_by(Product.id).all()

    def get(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def add(self, product: Product) -> Product:
        self.db.add(product)
        self._commit(f"inserting {product!r}")
        self.db.refresh(product)
        return product

    def save(self, product: Product) -> Product:
        self.db.add(product)
        self._commit(f"saving {product!r}")
        self.db.refresh(product)
        return product

    def delete(self, product: Product) -> None:
        self.db.delete(product)
        self._commit(f"deleting {product!r}")

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error while {action}: {e}", exc_info=True)
            raise RepositoryError(str(e)) from e


def get_product_repository(db: Session = Depends(get_db)) -> ProductRepository:
    """Dependency providing the repository for the current request's session."""
    return SqlAlchemyProductRepository(db)
