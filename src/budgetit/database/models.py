"""SQLAlchemy models for budgetit database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

MONEY = Numeric(12, 2)


class Plan(Base):
    """Budget plan model."""

    __tablename__ = "plans"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    description = Column(String, nullable=True)
    currency = Column(String, default="USD", nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    accounts = relationship("Account", back_populates="plan", cascade="all, delete-orphan")
    category_groups = relationship("CategoryGroup", back_populates="plan", cascade="all, delete-orphan")
    transactions = relationship("Transaction", back_populates="plan", cascade="all, delete-orphan")
    envelopes = relationship("Envelope", back_populates="plan", cascade="all, delete-orphan")


class Account(Base):
    """Account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    plan_id = Column(Integer, ForeignKey("plans.id"), nullable=False)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    balance = Column(MONEY, default=0, nullable=False)
    on_budget = Column(Boolean, default=True, nullable=False)
    closed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("plan_id", "name", name="uq_account_plan_name"),)

    # Relationships
    plan = relationship("Plan", back_populates="accounts")


class CategoryGroup(Base):
    """Category group model."""

    __tablename__ = "category_groups"

    id = Column(Integer, primary_key=True)
    plan_id = Column(Integer, ForeignKey("plans.id"), nullable=False)
    name = Column(String, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    hidden = Column(Boolean, default=False, nullable=False)

    # Relationships
    plan = relationship("Plan", back_populates="category_groups")
    categories = relationship("Category", back_populates="group", cascade="all, delete-orphan")


class Category(Base):
    """Category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    group_id = Column(Integer, ForeignKey("category_groups.id"), nullable=False)
    name = Column(String, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    hidden = Column(Boolean, default=False, nullable=False)

    # Relationships
    group = relationship("CategoryGroup", back_populates="categories")


class Transaction(Base):
    """Ledger entry model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    plan_id = Column(Integer, ForeignKey("plans.id"), nullable=False)
    date = Column(Date, nullable=False)
    amount = Column(MONEY, nullable=False)
    payee = Column(String, nullable=True)
    memo = Column(String, nullable=True)
    from_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    to_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    status = Column(String, default="uncleared", nullable=False)
    flag = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    plan = relationship("Plan", back_populates="transactions")


class Envelope(Base):
    """Budget record for one category and month."""

    __tablename__ = "envelopes"

    id = Column(Integer, primary_key=True)
    plan_id = Column(Integer, ForeignKey("plans.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    month = Column(Date, nullable=False)
    budgeted = Column(MONEY, default=0, nullable=False)
    activity = Column(MONEY, default=0, nullable=False)
    available = Column(MONEY, default=0, nullable=False)

    # One record per plan, category and month
    __table_args__ = (
        UniqueConstraint("plan_id", "category_id", "month", name="uq_envelope_plan_category_month"),
    )

    # Relationships
    plan = relationship("Plan", back_populates="envelopes")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
