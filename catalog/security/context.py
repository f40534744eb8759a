from pydantic import BaseModel
from typing import Literal, Optional

Role = Literal["admin", "manager", "customer"]

ADMIN: Role = "admin"
MANAGER: Role = "manager"
CUSTOMER: Role = "customer"


class ActorClaim(BaseModel):
    """
    Trusted identity attached to the request by authentication.
    This is the only object routes should ever trust for user + tenant info.
    """
    subject: str
    role: Role
    tenant_id: Optional[str] = None

    class Config:
        frozen = True

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN

    @property
    def is_manager(self) -> bool:
        return self.role == MANAGER
