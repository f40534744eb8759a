from fastapi import APIRouter, Depends, status

from catalog.api.deps import check_object_id, get_category_store, get_product_store, get_storage
from catalog.api.payload import RequestPayload, read_payload
from catalog.api.responses import dump, success
from catalog.schemas.product import ProductRead
from catalog.security.authorization import can_access
from catalog.security.context import ActorClaim
from catalog.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


def get_product_service(
    store=Depends(get_product_store),
    categories=Depends(get_category_store),
    storage=Depends(get_storage),
) -> ProductService:
    return ProductService(store, categories, storage)


@router.get("")
async def list_products(service: ProductService = Depends(get_product_service)):
    products = await service.list_products()
    return success([dump(ProductRead, p) for p in products])


@router.get("/{product_id}")
async def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
):
    check_object_id(product_id, "product")
    product = await service.get_product(product_id)
    return success(dump(ProductRead, product))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(
    actor: ActorClaim = Depends(can_access("products:create")),
    payload: RequestPayload = Depends(read_payload),
    service: ProductService = Depends(get_product_service),
):
    product = await service.create_product(actor, payload.data, payload.image)
    return success(dump(ProductRead, product), message="Product created successfully")


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    actor: ActorClaim = Depends(can_access("products:write")),
    payload: RequestPayload = Depends(read_payload),
    service: ProductService = Depends(get_product_service),
):
    check_object_id(product_id, "product")
    product = await service.update_product(actor, product_id, payload.data, payload.image)
    return success(dump(ProductRead, product), message="Product updated successfully")


@router.delete("/{product_id}")
async def delete_product(
    product_id: str,
    actor: ActorClaim = Depends(can_access("products:write")),
    service: ProductService = Depends(get_product_service),
):
    check_object_id(product_id, "product")
    await service.delete_product(actor, product_id)
    return success(message="Product deleted successfully")
