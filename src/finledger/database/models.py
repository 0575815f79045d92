"""SQLAlchemy models for finledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Enum,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

from finledger.domain.entities import TransactionType, TransactionOrigin, Frequency

Base = declarative_base()

MONEY = Numeric(12, 2)


def _enum(enum_cls, name: str) -> Enum:
    # Store enum values ("expense"), not member names ("EXPENSE")
    return Enum(enum_cls, name=name, values_callable=lambda cls: [m.value for m in cls])


TRANSACTION_TYPE = _enum(TransactionType, "transaction_type")


class Account(Base):
    """Account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    initial_balance = Column(MONEY, nullable=False, default=0)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_account_user_name"),)

    # Relationships
    transactions = relationship("Transaction", back_populates="account")


class Category(Base):
    """Category model. A null user_id marks a global category."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    user_id = Column(String, nullable=True, index=True)
    budget = Column(MONEY, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_category_owner_name"),)

    # Relationships
    transactions = relationship("Transaction", back_populates="category")


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    unique_id = Column(String, nullable=False, unique=True)
    user_id = Column(String, nullable=False, index=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    type = Column(TRANSACTION_TYPE, nullable=False)
    amount = Column(MONEY, nullable=False)
    description = Column(String, nullable=True)
    date = Column(Date, nullable=False)
    payment_method = Column(String, nullable=True)
    origin = Column(
        _enum(TransactionOrigin, "transaction_origin"),
        nullable=False,
        default=TransactionOrigin.MANUAL,
    )
    origin_id = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    account = relationship("Account", back_populates="transactions")
    category = relationship("Category", back_populates="transactions")


class SavingsGoal(Base):
    """Savings goal model. ``version`` guards concurrent deposits."""

    __tablename__ = "savings_goals"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    target_amount = Column(MONEY, nullable=False)
    current_amount = Column(MONEY, nullable=False, default=0)
    deadline = Column(Date, nullable=True)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __mapper_args__ = {"version_id_col": version}


class Debt(Base):
    """Installment debt model. ``version`` guards concurrent payments."""

    __tablename__ = "debts"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False)
    total_amount = Column(MONEY, nullable=False)
    amount_paid = Column(MONEY, nullable=False, default=0)
    installments_total = Column(Integer, nullable=False)
    installments_paid = Column(Integer, nullable=False, default=0)
    debt_type = Column(String, nullable=False)
    start_date = Column(Date, nullable=True)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __mapper_args__ = {"version_id_col": version}


class RecurringSchedule(Base):
    """Recurring payment schedule model."""

    __tablename__ = "recurring_schedules"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False)
    amount = Column(MONEY, nullable=False)
    type = Column(TRANSACTION_TYPE, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    frequency = Column(_enum(Frequency, "frequency"), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    next_date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
