"""Seed data shared by the database layer and the domain services."""

# Global categories the ledger operations book their expenses under
SAVINGS_TRANSFER_CATEGORY = "Savings Transfer"
DEBT_PAYMENT_CATEGORY = "Debt Payment"
SYSTEM_CATEGORIES = (SAVINGS_TRANSFER_CATEGORY, DEBT_PAYMENT_CATEGORY)

# Shared categories offered to every user by `init-categories`
DEFAULT_CATEGORIES = (
    "Salary",
    "Food",
    "Transport",
    "Housing",
    "Utilities",
    "Health",
    "Entertainment",
    "Shopping",
    "Education",
    "Other",
)
