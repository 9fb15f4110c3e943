"""Notification routes."""

from fastapi import APIRouter, Depends, status

from messledger.api.deps import get_actor, get_services
from messledger.api.schemas import (
    CountOut,
    NotificationFlags,
    NotificationIn,
    NotificationOut,
    PaymentDuesIn,
)
from messledger.domain.entities import Actor, PaymentDue
from messledger.domain.services import Services

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


@router.get("", response_model=list[NotificationOut])
def list_notifications(actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    """The caller's inbox plus broadcasts, newest first."""
    return services.notifications.list_for(actor)


@router.get("/user/{user_id}", response_model=list[NotificationOut])
def list_user_notifications(
    user_id: str, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)
):
    return services.notifications.list_for_user(actor, user_id)


@router.post("", response_model=NotificationOut, status_code=status.HTTP_201_CREATED)
def send_notification(body: NotificationIn, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    return services.notifications.send(actor, body.user_id, body.message, type=body.type, details=body.details)


@router.post("/payment", response_model=CountOut)
def send_payment_dues(body: PaymentDuesIn, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    dues = [PaymentDue(user_id=d.user_id, member_name=d.member_name, amount=d.amount) for d in body.dues]
    return CountOut(count=services.notifications.send_payment_dues(actor, dues))


@router.put("/mark-read", response_model=CountOut)
def mark_all_read(actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    return CountOut(count=services.notifications.mark_all_read(actor))


@router.put("/{notification_id}", response_model=NotificationOut)
def update_flags(
    notification_id: int,
    body: NotificationFlags,
    actor: Actor = Depends(get_actor),
    services: Services = Depends(get_services),
):
    return services.notifications.update_flags(
        actor, notification_id, is_read=body.is_read, status=body.status, is_paid=body.is_paid
    )


@router.put("/{notification_id}/paid", response_model=NotificationOut)
def mark_paid(notification_id: int, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    return services.notifications.mark_paid(actor, notification_id)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: int, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)
):
    services.notifications.delete(actor, notification_id)
