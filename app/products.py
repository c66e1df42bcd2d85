# product_api/app/products.py

"""
Product routes.
Each route declares its path and body rules through its parameters and
schemas; FastAPI checks all of them before the handler runs, so handlers
only deal with existence checks and persistence.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from .models import Product
from .repository import ProductRepository, RepositoryError, get_product_repository
from .schemas import (
    ErrorDetail,
    MessageResponse,
    ProductCreate,
    ProductResponse,
    ProductSummary,
    ProductUpdate,
    ValidationErrorResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["Products"])

PRODUCT_NOT_FOUND = "Product not found"

BAD_REQUEST = {
    status.HTTP_400_BAD_REQUEST: {
        "model": ValidationErrorResponse,
        "description": "Bad Request - Invalid ID or invalid input data",
    }
}
NOT_FOUND = {
    status.HTTP_404_NOT_FOUND: {"model": ErrorDetail, "description": "Product Not Found"}
}

# Signed 64-bit range, the widest integer the supported databases can bind.
ProductId = Path(..., ge=-(2**63), le=2**63 - 1, description="The ID of the product")


def _get_or_404(repo: ProductRepository, product_id: int, action: str) -> Product:
    product = repo.get(product_id)
    if product is None:
        logger.warning(f"Product with ID: {product_id} not found for {action}.")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PRODUCT_NOT_FOUND)
    return product


@router.get(
    "/",
    response_model=List[ProductSummary],
    summary="Get a list of products",
)
def list_products(repo: ProductRepository = Depends(get_product_repository)):
    """
    Returns every product, without availability or timestamps.
    """
    products = repo.list_all()
    logger.info(f"Retrieved {len(products)} products.")
    return products


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
    summary="Get a product by ID",
)
def get_product(
    product_id: int = ProductId,
    repo: ProductRepository = Depends(get_product_repository),
):
    """
    Returns a product based on its unique ID.
    """
    logger.info(f"Fetching product with ID: {product_id}")
    return _get_or_404(repo, product_id, "retrieval")


@router.post(
    "/",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses=BAD_REQUEST,
    summary="Create a new product",
)
def create_product(
    payload: ProductCreate,
    repo: ProductRepository = Depends(get_product_repository),
):
    """
    Creates a new product. Availability starts out as true.
    """
    logger.info(f"Creating product: {payload.name}")
    try:
        product = repo.add(Product(name=payload.name, price=payload.price, availability=True))
    except RepositoryError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not create product.",
        )
    logger.info(f"Product '{product.name}' (ID: {product.id}) created successfully.")
    return product


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
    summary="Update a product with user input",
)
def update_product(
    payload: ProductUpdate,
    product_id: int = ProductId,
    repo: ProductRepository = Depends(get_product_repository),
):
    """
    Replaces the name, price and availability of an existing product.
    """
    logger.info(f"Updating product with ID: {product_id} with data: {payload.model_dump()}")
    product = _get_or_404(repo, product_id, "update")

    for field, value in payload.model_dump().items():
        setattr(product, field, value)
    try:
        product = repo.save(product)
    except RepositoryError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not update product.",
        )
    logger.info(f"Product '{product.name}' (ID: {product_id}) updated successfully.")
    return product


@router.patch(
    "/{product_id}",
    response_model=ProductResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
    summary="Toggle product availability",
)
def toggle_availability(
    product_id: int = ProductId,
    repo: ProductRepository = Depends(get_product_repository),
):
    """
    Flips the availability of a product and returns the updated product.
    """
    product = _get_or_404(repo, product_id, "availability toggle")

    product.availability = not product.availability
    try:
        product = repo.save(product)
    except RepositoryError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not update product availability.",
        )
    logger.info(f"Product (ID: {product_id}) availability is now {product.availability}.")
    return product


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
    summary="Delete a product by ID",
)
def delete_product(
    product_id: int = ProductId,
    repo: ProductRepository = Depends(get_product_repository),
):
    """
    Deletes a product and returns a confirmation message.
    """
    logger.info(f"Attempting to delete product with ID: {product_id}")
    product = _get_or_404(repo, product_id, "deletion")

    try:
        repo.delete(product)
    except RepositoryError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while deleting the product.",
        )
    logger.info(f"Product (ID: {product_id}) deleted successfully.")
    return {"message": "Product deleted"}
