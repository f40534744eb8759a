from fastapi import APIRouter, Depends, status

from catalog.api.deps import check_object_id, get_category_store
from catalog.api.payload import RequestPayload, read_payload
from catalog.api.responses import dump, success
from catalog.schemas.category import CategoryListItem, CategoryRead
from catalog.security.authorization import can_access
from catalog.security.context import ActorClaim
from catalog.services.category_service import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


def get_category_service(store=Depends(get_category_store)) -> CategoryService:
    return CategoryService(store)


@router.get("")
async def list_categories(
    actor: ActorClaim = Depends(can_access("categories:read")),
    service: CategoryService = Depends(get_category_service),
):
    categories = await service.list_categories()
    return success([dump(CategoryListItem, c) for c in categories])


@router.get("/{category_id}")
async def get_category(
    category_id: str,
    actor: ActorClaim = Depends(can_access("categories:read")),
    service: CategoryService = Depends(get_category_service),
):
    check_object_id(category_id, "category")
    category = await service.get_category(category_id)
    return success(dump(CategoryRead, category))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(
    actor: ActorClaim = Depends(can_access("categories:write")),
    payload: RequestPayload = Depends(read_payload),
    service: CategoryService = Depends(get_category_service),
):
    category = await service.create_category(actor, payload.data)
    return success(dump(CategoryRead, category), message="Category created successfully")


@router.patch("/{category_id}")
async def update_category(
    category_id: str,
    actor: ActorClaim = Depends(can_access("categories:write")),
    payload: RequestPayload = Depends(read_payload),
    service: CategoryService = Depends(get_category_service),
):
    check_object_id(category_id, "category")
    category = await service.update_category(actor, category_id, payload.data)
    return success(dump(CategoryRead, category), message="Category updated successfully")


@router.delete("/{category_id}")
async def delete_category(
    category_id: str,
    actor: ActorClaim = Depends(can_access("categories:write")),
    service: CategoryService = Depends(get_category_service),
):
    check_object_id(category_id, "category")
    await service.delete_category(actor, category_id)
    return success(message="Category deleted successfully")
