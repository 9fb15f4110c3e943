"""Domain layer for messledger application."""

_SERVICES = {
    "MemberService": "messledger.domain.member",
    "ExpenseService": "messledger.domain.expense",
    "MealService": "messledger.domain.meal",
    "GuestMealService": "messledger.domain.guest_meal",
    "MarketDutyService": "messledger.domain.duty",
    "ManagerService": "messledger.domain.manager",
    "CookingService": "messledger.domain.cooking",
    "NotificationService": "messledger.domain.notification",
    "SettlementService": "messledger.domain.settlement",
    "SummaryService": "messledger.domain.summary",
    "BillService": "messledger.domain.bill",
    "MonthClearService": "messledger.domain.month_clear",
    "Services": "messledger.domain.services",
    "build_services": "messledger.domain.services",
}

__all__ = list(_SERVICES)


# Services import the database layer, which imports entities from this
# package, so they are loaded on first access
def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
