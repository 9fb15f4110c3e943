"""Expense routes."""

from typing import Optional

from fastapi import APIRouter, Depends, status

from messledger.api.deps import get_actor, get_services
from messledger.api.schemas import CountOut, ExpenseIn, ExpenseOut, ExpenseUpdate
from messledger.domain.entities import Actor
from messledger.domain.services import Services

router = APIRouter(prefix="/api/expenses", tags=["Expenses"])


@router.get("", response_model=list[ExpenseOut])
def list_expenses(
    month: Optional[str] = None,
    status: Optional[str] = None,
    paid_by: Optional[str] = None,
    actor: Actor = Depends(get_actor),
    services: Services = Depends(get_services),
):
    return services.expenses.list_expenses(month=month, status=status, paid_by=paid_by)


@router.post("", response_model=ExpenseOut, status_code=status.HTTP_201_CREATED)
def create_expense(body: ExpenseIn, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    return services.expenses.create_expense(
        actor,
        description=body.description,
        amount=body.amount,
        category=body.category.value,
        date=body.date,
        paid_by=body.paid_by,
        status=body.status.value if body.status else None,
    )


# Must stay above /{expense_id}
@router.put("/approve-all", response_model=CountOut)
def approve_all(actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    return CountOut(count=services.expenses.approve_all(actor))


@router.put("/{expense_id}", response_model=ExpenseOut)
def update_expense(
    expense_id: int,
    body: ExpenseUpdate,
    actor: Actor = Depends(get_actor),
    services: Services = Depends(get_services),
):
    return services.expenses.update_expense(actor, expense_id, **body.model_dump(mode="json", exclude_none=True))


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(expense_id: int, actor: Actor = Depends(get_actor), services: Services = Depends(get_services)):
    services.expenses.delete_expense(actor, expense_id)
