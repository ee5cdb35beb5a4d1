from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.schemas.product import Product as ProductSchema, ProductCreate, ProductUpdate
from app.auth.security import is_producer
from app.auth.session import SessionContext
from app.services.producer_catalog import ProducerCatalogManager

router = APIRouter()


def get_manager(
    db: Session = Depends(get_db),
    current_session: SessionContext = Depends(is_producer)
) -> ProducerCatalogManager:
    return ProducerCatalogManager(db, current_session)


@router.post(
    "/", 
    response_model=ProductSchema, 
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
    description="Create a product owned by the signed-in producer."
)
def create_product(
    product: ProductCreate,
    manager: ProducerCatalogManager = Depends(get_manager)
):
    """
    Create a new product.
    
    - **name**: Product name (required)
    - **description**: Product description (optional)
    - **availability_start**: First day the product is offered (required)
    - **availability_end**: Last day the product is offered, inclusive (required)
    """
    return manager.create_product(product)

@router.get(
    "/", 
    response_model=List[ProductSchema],
    summary="List my products",
    description="Products of the signed-in producer, newest first."
)
def read_products(manager: ProducerCatalogManager = Depends(get_manager)):
    return manager.list_products()

@router.get(
    "/{product_id}", 
    response_model=ProductSchema,
    summary="Get product by ID"
)
def read_product(
    product_id: int,
    manager: ProducerCatalogManager = Depends(get_manager)
):
    return manager.get_product(product_id)

@router.put(
    "/{product_id}", 
    response_model=ProductSchema,
    summary="Update a product",
    description="Update one of the signed-in producer's products."
)
def update_product(
    product_id: int,
    product: ProductUpdate,
    manager: ProducerCatalogManager = Depends(get_manager)
):
    """
    Update an existing product. Omitted fields are left unchanged; the
    resulting availability window must still start on or before its end.
    """
    return manager.update_product(product_id, product)

@router.delete(
    "/{product_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete a product",
    description="Delete a product and the favorites pointing at it."
)
def delete_product(
    product_id: int,
    confirm: bool = Query(False, description="Must be true to delete"),
    manager: ProducerCatalogManager = Depends(get_manager)
):
    manager.delete_product(product_id, confirm=confirm)
    return {"ok": True, "message": "Product deleted successfully"}
