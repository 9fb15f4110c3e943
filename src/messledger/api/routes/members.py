"""Member routes."""

from fastapi import APIRouter, Depends, status

from messledger.api.deps import get_actor, get_services
from messledger.api.schemas import MemberIn, MemberOut, MemberUpdate
from messledger.domain.entities import Actor
from messledger.domain.services import Services

router = APIRouter(prefix="/api/members", tags=["Members"])


@router.get("", response_model=list[MemberOut])
def list_members(actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    return services.members.list_members()


@router.get("/{member_id}", response_model=MemberOut)
def get_member(member_id: str, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    return services.members.require_member(member_id)


@router.post("", response_model=MemberOut, status_code=status.HTTP_201_CREATED)
def create_member(body: MemberIn, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    return services.members.create_member(
        actor,
        user_id=body.user_id,
        name=body.name,
        role=body.role.value if body.role else None,
        deposit=body.deposit,
        email=body.email,
        mobile=body.mobile,
        joined_at=body.joined_at,
        date_of_birth=body.date_of_birth,
    )


@router.put("/{member_id}", response_model=MemberOut)
def update_member(
    member_id: str,
    body: MemberUpdate,
    actor: Actor = Depends(get_actor),
    services: Services = Depends(get_services),
):
    return services.members.update_member(actor, member_id, **body.model_dump(exclude_none=True))


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_member(member_id: str, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    services.members.delete_member(actor, member_id)
