"""Monthly summary, settlement and bill routes."""

from fastapi import APIRouter, Depends

from messledger.api.deps import get_actor, get_services
from messledger.api.schemas import (
    AdminExpenseReportOut,
    InvoiceOut,
    MemberTotalsOut,
    MonthBillOut,
    MonthLedgerOut,
    PaymentIn,
    SettlementOut,
)
from messledger.domain.entities import Actor, PaymentUpdate
from messledger.domain.services import Services

router = APIRouter(prefix="/api/summary", tags=["Summary"])


@router.get("/{month}", response_model=MonthLedgerOut)
def get_month_summary(month: str, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    return services.summaries.month_summary(actor, month)


@router.put("/{month}/payment", response_model=SettlementOut)
def record_payment(
    month: str,
    payment: PaymentIn,
    actor: Actor = Depends(get_actor),
    services: Services = Depends(get_services),
):
    return services.settlements.record_payment(actor, month, PaymentUpdate(**payment.model_dump()))


@router.get("/{month}/admin-expenses", response_model=AdminExpenseReportOut)
def get_admin_expenses(month: str, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    return services.summaries.admin_expenses(actor, month)


@router.get("/{month}/invoice/{member_id}", response_model=InvoiceOut)
def get_invoice(
    month: str,
    member_id: str,
    actor: Actor = Depends(get_actor),
    services: Services = Depends(get_services),
):
    return services.summaries.invoice(actor, month, member_id)


@router.get("/{month}/totals/{member_id}", response_model=MemberTotalsOut)
def get_member_totals(
    month: str,
    member_id: str,
    actor: Actor = Depends(get_actor),
    services: Services = Depends(get_services),
):
    totals = services.summaries.member_totals(actor, month, member_id)
    return MemberTotalsOut(
        month=totals.month,
        member_id=totals.member_id,
        member_name=totals.member_name,
        expenses=totals.expenses,
        total=totals.total,
    )


@router.get("/{month}/bill", response_model=MonthBillOut)
def get_bill(month: str, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    return services.bills.build_bill(actor, month)
