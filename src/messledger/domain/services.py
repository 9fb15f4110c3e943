"""Wiring of domain services around one database instance."""

from dataclasses import dataclass
from typing import Optional

from messledger.cache import MemberCache
from messledger.config import Settings, get_settings
from messledger.database.base import Database
from messledger.domain.bill import BillService
from messledger.domain.cooking import CookingService
from messledger.domain.duty import MarketDutyService
from messledger.domain.expense import ExpenseService
from messledger.domain.guest_meal import GuestMealService
from messledger.domain.manager import ManagerService
from messledger.domain.meal import MealService
from messledger.domain.month_clear import MonthClearService
from messledger.domain.member import MemberService
from messledger.domain.notification import NotificationService
from messledger.domain.settlement import SettlementService
from messledger.domain.summary import SummaryService


@dataclass
class Services:
    """Every domain service, sharing one database and member cache."""

    members: MemberService
    expenses: ExpenseService
    meals: MealService
    guest_meals: GuestMealService
    notifications: NotificationService
    duties: MarketDutyService
    managers: ManagerService
    cooking: CookingService
    settlements: SettlementService
    summaries: SummaryService
    bills: BillService
    month_clear: MonthClearService


def build_services(
    db: Database, cache: Optional[MemberCache] = None, settings: Optional[Settings] = None
) -> Services:
    """Build the service graph for a database.

    Args:
        db: Database instance
        cache: Member list cache shared across calls; no caching if None
        settings: Mess rules; defaults to the process settings
    """
    settings = settings or get_settings()
    members = MemberService(db, cache)
    notifications = NotificationService(db, members)
    settlements = SettlementService(db, members)
    return Services(
        members=members,
        expenses=ExpenseService(db, members),
        meals=MealService(db, members),
        guest_meals=GuestMealService(db, members),
        notifications=notifications,
        duties=MarketDutyService(db, members, notifications),
        managers=ManagerService(db, members, notifications),
        cooking=CookingService(db, members, notifications),
        settlements=settlements,
        summaries=SummaryService(db, members, settlements),
        bills=BillService(
            db,
            members,
            min_meals=settings.min_meals_per_month,
            guest_meal_prices=settings.guest_meal_prices,
        ),
        month_clear=MonthClearService(db),
    )
