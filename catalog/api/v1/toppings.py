from fastapi import APIRouter, Depends, status

from catalog.api.deps import check_object_id, get_storage, get_topping_store
from catalog.api.payload import RequestPayload, read_payload
from catalog.api.responses import dump, success
from catalog.schemas.topping import ToppingRead
from catalog.security.authorization import can_access
from catalog.security.context import ActorClaim
from catalog.services.topping_service import ToppingService

router = APIRouter(prefix="/toppings", tags=["toppings"])


def get_topping_service(
    store=Depends(get_topping_store),
    storage=Depends(get_storage),
) -> ToppingService:
    return ToppingService(store, storage)


@router.get("")
async def list_toppings(service: ToppingService = Depends(get_topping_service)):
    toppings = await service.list_toppings()
    return success([dump(ToppingRead, t) for t in toppings])


@router.get("/{topping_id}")
async def get_topping(
    topping_id: str,
    service: ToppingService = Depends(get_topping_service),
):
    check_object_id(topping_id, "topping")
    topping = await service.get_topping(topping_id)
    return success(dump(ToppingRead, topping))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_topping(
    actor: ActorClaim = Depends(can_access("toppings:write")),
    payload: RequestPayload = Depends(read_payload),
    service: ToppingService = Depends(get_topping_service),
):
    topping = await service.create_topping(actor, payload.data, payload.image)
    return success(dump(ToppingRead, topping), message="Topping created successfully")


@router.put("/{topping_id}")
async def update_topping(
    topping_id: str,
    actor: ActorClaim = Depends(can_access("toppings:write")),
    payload: RequestPayload = Depends(read_payload),
    service: ToppingService = Depends(get_topping_service),
):
    check_object_id(topping_id, "topping")
    topping = await service.update_topping(actor, topping_id, payload.data, payload.image)
    return success(dump(ToppingRead, topping), message="Topping updated successfully")


@router.delete("/{topping_id}")
async def delete_topping(
    topping_id: str,
    actor: ActorClaim = Depends(can_access("toppings:write")),
    service: ToppingService = Depends(get_topping_service),
):
    check_object_id(topping_id, "topping")
    await service.delete_topping(actor, topping_id)
    return success(message="Topping deleted successfully")
