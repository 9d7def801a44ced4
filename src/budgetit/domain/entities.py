"""Domain model entities for budgetit.

These are pure data classes representing business concepts, independent of
database schema. Stored records (plans, accounts, categories, transactions,
envelopes) come back from the database layer as these frozen dataclasses;
derived figures such as the monthly plan summary are built from them and are
never persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    """Kind of account, split into asset-like and liability-like types."""

    CHECKING = "checking"
    SAVINGS = "savings"
    CASH = "cash"
    INVESTMENT = "investment"
    OTHER_ASSET = "other_asset"
    CREDIT_CARD = "credit_card"
    LINE_OF_CREDIT = "line_of_credit"
    MORTGAGE = "mortgage"
    LOAN = "loan"
    OTHER_LIABILITY = "other_liability"

    @property
    def is_liability(self) -> bool:
        return self in LIABILITY_TYPES


LIABILITY_TYPES = frozenset(
    {
        AccountType.CREDIT_CARD,
        AccountType.LINE_OF_CREDIT,
        AccountType.MORTGAGE,
        AccountType.LOAN,
        AccountType.OTHER_LIABILITY,
    }
)


class ClearingStatus(str, Enum):
    """Bank clearing status of a transaction."""

    UNCLEARED = "uncleared"
    CLEARED = "cleared"
    RECONCILED = "reconciled"


class FlagColor(str, Enum):
    """Optional user flag on a transaction."""

    RED = "red"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    PURPLE = "purple"


class Bucket(str, Enum):
    """Semantic spending bucket used by allocation templates."""

    NEEDS = "needs"
    WANTS = "wants"
    DEBT = "debt"
    SAVINGS = "savings"
    INVESTMENTS = "investments"
    INCOME = "income"


@dataclass(frozen=True)
class Plan:
    """Budget plan: the unit that owns accounts, categories and envelopes."""

    id: int
    name: str
    description: Optional[str]
    currency: str
    created_at: datetime


@dataclass(frozen=True)
class Account:
    """Account domain entity.

    Balances are signed. Liability accounts hold their debt as a negative
    balance; ``debt`` reports it back as a positive magnitude.
    """

    id: int
    plan_id: int
    name: str
    type: AccountType
    balance: Decimal
    on_budget: bool
    closed: bool
    created_at: datetime

    @property
    def is_liability(self) -> bool:
        return self.type.is_liability

    @property
    def debt(self) -> Decimal:
        """Amount owed on a liability account, zero for assets or credit balances."""
        if not self.is_liability or self.balance >= 0:
            return Decimal("0")
        return -self.balance


@dataclass(frozen=True)
class CategoryGroup:
    """Ordered group of categories."""

    id: int
    plan_id: int
    name: str
    sort_order: int
    hidden: bool


@dataclass(frozen=True)
class Category:
    """Category domain entity; the join key into envelopes."""

    id: int
    group_id: int
    name: str
    sort_order: int
    hidden: bool


@dataclass(frozen=True)
class Transaction:
    """Ledger entry domain entity.

    A negative amount is an outflow from ``from_account_id``. Setting
    ``to_account_id`` makes the entry a transfer, in which case any category
    is ignored for budgeting purposes.
    """

    id: int
    plan_id: int
    date: date
    amount: Decimal
    payee: Optional[str]
    memo: Optional[str]
    from_account_id: int
    to_account_id: Optional[int]
    category_id: Optional[int]
    status: ClearingStatus
    flag: Optional[FlagColor]
    created_at: datetime

    @property
    def is_transfer(self) -> bool:
        return self.to_account_id is not None

    @property
    def affects_envelope(self) -> bool:
        return not self.is_transfer and self.category_id is not None


@dataclass(frozen=True)
class Envelope:
    """Per (plan, category, month) budget record."""

    plan_id: int
    category_id: int
    month: date
    budgeted: Decimal
    activity: Decimal
    available: Decimal


@dataclass(frozen=True)
class EnvelopeRow:
    """One visible category's envelope figures for a month (zeros when no record)."""

    category_id: int
    category_name: str
    group_id: int
    group_name: str
    budgeted: Decimal
    activity: Decimal
    available: Decimal
    hidden: bool = False


@dataclass(frozen=True)
class PlanSummary:
    """Derived plan-wide figures for one month."""

    month: date
    total_income: Decimal
    total_budgeted: Decimal
    to_be_budgeted: Decimal
    total_activity: Decimal
    total_available: Decimal
    rows: tuple[EnvelopeRow, ...] = ()


@dataclass(frozen=True)
class AccountSummary:
    """Totals across a plan's open accounts."""

    total_assets: Decimal
    total_liabilities: Decimal
    net_worth: Decimal
    asset_count: int
    liability_count: int


@dataclass(frozen=True)
class AllocationTemplate:
    """Named percentage breakdown across buckets."""

    id: str
    name: str
    description: str
    breakdown: dict[Bucket, int]


@dataclass(frozen=True)
class AllocationLine:
    """One category's proposed budgeted amount."""

    category_id: int
    category_name: str
    bucket: Bucket
    current_budgeted: Decimal
    new_budgeted: Decimal


@dataclass(frozen=True)
class AllocationPreview:
    """Result of distributing a target amount through a template."""

    template_id: str
    month: date
    target: Decimal
    lines: tuple[AllocationLine, ...]
    empty_buckets: tuple[Bucket, ...] = ()

    @property
    def total_assigned(self) -> Decimal:
        return sum((line.new_budgeted for line in self.lines), Decimal("0"))

    @property
    def unassigned(self) -> Decimal:
        return self.target - self.total_assigned


@dataclass(frozen=True)
class AllocationResult:
    """Outcome of writing a set of (category, amount) assignments."""

    month: date
    succeeded: tuple[tuple[int, Decimal], ...]
    failed: tuple[tuple[int, Decimal], ...]
    summary: Optional[PlanSummary] = None

    @property
    def complete(self) -> bool:
        return not self.failed


@dataclass(frozen=True)
class SpendingLine:
    """Aggregated spending for a category or a category group."""

    id: Optional[int]
    name: str
    amount: Decimal
    count: int
    group_name: Optional[str] = None


@dataclass(frozen=True)
class SpendingReport:
    """Monthly spending grouped by category and by category group."""

    month: date
    total: Decimal
    by_category: tuple[SpendingLine, ...] = field(default_factory=tuple)
    by_group: tuple[SpendingLine, ...] = field(default_factory=tuple)
