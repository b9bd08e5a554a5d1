from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from product_catalog.core.exceptions import ProductNotFoundError
from product_catalog.models.enums import SortCriteria, SortOrder
from product_catalog.models.product import Product, ProductCreate, ProductRead, ProductUpdate
from product_catalog.services.base_product_service import BaseProductService
from product_catalog.services.product_service import get_product_service
from typing import List, Optional
import structlog

logger = structlog.get_logger()

router = APIRouter(prefix="/products", tags=["Products"])

MUTABLE_FIELDS = ("name", "description", "price", "category")


def _not_found(product_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Product {product_id} not found"
    )


async def _require_product(service: BaseProductService, product_id: int) -> Product:
    """Look a product up, turning both a None result and ProductNotFoundError into 404."""
    try:
        product = await service.get_product_by_id(product_id)
    except ProductNotFoundError:
        raise _not_found(product_id)
    if product is None:
        raise _not_found(product_id)
    return product


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def add_product(
    product: ProductCreate,
    service: BaseProductService = Depends(get_product_service)
):
    """Create a new product"""
    try:
        return await service.add_product(product)
    except Exception as e:
        logger.error("Failed to add product", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add product"
        )


@router.get("", response_model=List[ProductRead])
async def get_all_products(
    service: BaseProductService = Depends(get_product_service)
):
    """List every product"""
    try:
        return await service.get_all_products()
    except Exception as e:
        logger.error("Failed to list products", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list products"
        )


@router.get("/search", response_model=List[ProductRead])
async def get_products_by_name(
    name: str = Query(..., description="Name or part of a name to search for"),
    service: BaseProductService = Depends(get_product_service)
):
    """Search products by name. An empty result is reported as 400."""
    try:
        products = await service.get_products_by_name(name)
    except Exception as e:
        logger.error("Failed to search products", name=name, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to search products"
        )

    if not products:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"No products found matching '{name}'"
        )
    return products


@router.get("/total-count", response_model=int)
async def get_total_product_count(
    service: BaseProductService = Depends(get_product_service)
):
    try:
        return await service.get_total_product_count()
    except Exception as e:
        logger.error("Failed to count products", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to count products"
        )


@router.get("/sort", response_model=List[ProductRead])
async def get_sorted_products(
    criteria: Optional[str] = Query(None, description="name, category or price"),
    order: Optional[str] = Query(None, description="asc or desc, defaults to asc"),
    service: BaseProductService = Depends(get_product_service)
):
    """List products sorted by name, category or price"""
    try:
        sort_criteria = SortCriteria.parse(criteria)
        sort_order = SortOrder.parse(order)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    sorters = {
        SortCriteria.NAME: service.sort_products_by_name,
        SortCriteria.CATEGORY: service.sort_products_by_category,
        SortCriteria.PRICE: service.sort_products_by_price,
    }
    try:
        return await sorters[sort_criteria](sort_order)
    except Exception as e:
        logger.error(
            "Failed to sort products",
            criteria=sort_criteria.value,
            order=sort_order.value,
            error=str(e)
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to sort products"
        )


@router.get("/category/{category}", response_model=List[ProductRead])
async def get_products_by_category(
    category: str,
    service: BaseProductService = Depends(get_product_service)
):
    """List products in a category. An empty category is reported as 404."""
    try:
        products = await service.get_products_by_category(category)
    except Exception as e:
        logger.error("Failed to get products by category", category=category, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get products by category"
        )

    if not products:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No products found in category '{category}'"
        )
    return products


@router.get("/{product_id}", response_model=ProductRead)
async def get_product_by_id(
    product_id: int,
    service: BaseProductService = Depends(get_product_service)
):
    try:
        return await _require_product(service, product_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("Failed to get product", product_id=product_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get product"
        )


@router.put("/{product_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_product(
    product_id: int,
    product_update: ProductUpdate,
    service: BaseProductService = Depends(get_product_service)
):
    """Overwrite name, description, price and category of an existing product"""
    try:
        product = await _require_product(service, product_id)
        for field in MUTABLE_FIELDS:
            setattr(product, field, getattr(product_update, field))
        await service.update_product(product)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("Failed to update product", product_id=product_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update product"
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_product(
    product_id: int,
    service: BaseProductService = Depends(get_product_service)
):
    try:
        await _require_product(service, product_id)
        await service.delete_product(product_id)
    except HTTPException:
        raise
    except ProductNotFoundError:
        # Removed between the lookup and the delete
        raise _not_found(product_id)
    except Exception as e:
        logger.error("Failed to delete product", product_id=product_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete product"
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_all_products(
    service: BaseProductService = Depends(get_product_service)
):
    try:
        await service.delete_all_products()
    except Exception as e:
        logger.error("Failed to delete all products", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete all products"
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
