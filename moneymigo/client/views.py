"""
Client view models

In-memory state behind the Transactions and Investments screens: filter
selection, sort order, dialog visibility and form fields. Every change to
filters or sort order, and every mutation, re-fetches from the API. Nothing
is updated optimistically; on failure the error text is kept and the
previous data stays in place.
"""

import logging
from datetime import date
from typing import Any, Callable, Dict, List, Optional
from pydantic import BaseModel, Field

from moneymigo.client.api import ApiError, MoneyMigoClient

logger = logging.getLogger(__name__)

PURPOSE_OPTIONS = [
    ("home", "Home"),
    ("fuel", "Fuel"),
    ("shopping", "Shopping"),
    ("groceries", "Groceries"),
    ("grooming", "Grooming"),
    ("gym", "Gym"),
    ("utilities", "Utilities"),
    ("entertainment", "Entertainment"),
    ("healthcare", "Healthcare"),
    ("education", "Education"),
    ("transportation", "Transportation"),
    ("medical", "Medical"),
    ("loan", "Loan"),
    ("food", "Food & Dining"),
    ("salary", "Salary"),
    ("business", "Business"),
    ("investment", "Investment"),
    ("other", "Other"),
]

INVESTMENT = "investment"

def purpose_label(purpose: Optional[str]) -> str:
    """Display label for a purpose, falling back to the raw value"""
    if not purpose:
        return ""
    return dict(PURPOSE_OPTIONS).get(purpose, purpose)

def current_month_start(today: date = None) -> date:
    today = today or date.today()
    return today.replace(day=1)

def always_confirm(message: str) -> bool:
    return True

class FilterState(BaseModel):
    """
    Filter dialog state. Only the fields of the active filter type are sent.
    """
    filter_type: str = Field("dateRange", pattern="^(all|dateRange|month|year)$")
    start_date: Optional[date] = Field(default_factory=lambda: current_month_start())
    end_date: Optional[date] = None
    month: Optional[int] = Field(None, ge=1, le=12)
    year: Optional[int] = None
    purpose: str = ""

    def to_params(self) -> Dict[str, Any]:
        params = {}

        if self.filter_type == "dateRange":
            if self.start_date:
                params["startDate"] = self.start_date.isoformat()
            if self.end_date:
                params["endDate"] = self.end_date.isoformat()
        elif self.filter_type == "month" and self.month:
            params["month"] = self.month
            if self.year:
                params["year"] = self.year
        elif self.filter_type == "year" and self.year:
            params["year"] = self.year

        if self.purpose:
            params["purpose"] = self.purpose

        return params

    def active_count(self) -> int:
        count = 0
        if self.filter_type != "all" and (self.start_date or self.end_date or self.month or self.year):
            count += 1
        if self.purpose:
            count += 1
        return count

class TransactionForm(BaseModel):
    """Add/edit dialog fields"""
    type: str = "expense"
    amount: Optional[float] = None
    transaction_date: date = Field(default_factory=date.today)
    purpose: str = ""
    description: str = ""
    payment_type: str = "cash"
    editing_id: Optional[int] = None

    @classmethod
    def from_transaction(cls, transaction: Dict[str, Any]) -> "TransactionForm":
        # Dates may come back as full ISO timestamps
        raw_date = str(transaction["transaction_date"])[:10]
        return cls(
            type=transaction["type"],
            amount=float(transaction["amount"]),
            transaction_date=date.fromisoformat(raw_date),
            purpose=transaction.get("purpose") or "",
            description=transaction.get("description") or "",
            payment_type=transaction["payment_type"],
            editing_id=transaction["id"]
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "amount": self.amount,
            "transaction_date": self.transaction_date.isoformat(),
            "purpose": self.purpose,
            "description": self.description,
            "payment_type": self.payment_type
        }

class TransactionsView:
    """
    State behind the transactions screen
    """

    def __init__(self, client: MoneyMigoClient, confirm: Callable[[str], bool] = always_confirm):
        self.client = client
        self.confirm = confirm

        self.transactions: List[Dict[str, Any]] = []
        self.stats: Dict[str, float] = {"totalIncome": 0, "totalExpense": 0, "balance": 0}
        self.payment_types: List[Dict[str, Any]] = []

        self.filters = FilterState()
        self.sort_order = "desc"
        self.form = TransactionForm()

        self.show_dialog = False
        self.show_filter_dialog = False
        self.show_add_payment_type = False
        self.error: Optional[str] = None

    def query_params(self) -> Dict[str, Any]:
        params = self.filters.to_params()
        if self.sort_order:
            params["sortOrder"] = self.sort_order
        return params

    @property
    def total_income(self) -> float:
        return self.stats.get("totalIncome") or 0

    @property
    def total_expense(self) -> float:
        return self.stats.get("totalExpense") or 0

    @property
    def balance(self) -> float:
        return self.stats.get("balance") or 0

    def _call(self, action: str, func, *args):
        """Run an API call, recording its error instead of raising"""
        try:
            result = func(*args)
        except ApiError as e:
            logger.warning("Error %s: %s", action, e.message)
            self.error = e.message
            return None
        self.error = None
        return result

    def refresh(self):
        """Re-fetch transactions, stats and payment types"""
        self.fetch_transactions()
        self.fetch_stats()
        self.fetch_payment_types()

    def fetch_transactions(self):
        data = self._call("fetching transactions", self.client.get_transactions, self.query_params())
        if data is not None:
            self.transactions = data

    def fetch_stats(self):
        data = self._call("fetching stats", self.client.get_transaction_stats, self.query_params())
        if data is not None:
            self.stats = data

    def fetch_payment_types(self):
        data = self._call("fetching payment types", self.client.get_payment_types)
        if data is not None:
            self.payment_types = data

    # Filters and sorting

    def set_filters(self, **changes):
        self.filters = FilterState(**{**self.filters.model_dump(), **changes})
        self.refresh()

    def clear_filters(self):
        self.filters = FilterState()
        self.refresh()

    def toggle_sort(self):
        self.sort_order = "asc" if self.sort_order == "desc" else "desc"
        self.refresh()

    # Add / edit dialog

    def open_new(self):
        self.form = TransactionForm()
        self.show_dialog = True

    def edit(self, transaction: Dict[str, Any]):
        self.form = TransactionForm.from_transaction(transaction)
        self.show_dialog = True

    def cancel(self):
        self.form = TransactionForm()
        self.show_dialog = False

    def save(self) -> bool:
        """Create or update from the form. Keeps the dialog open on failure."""
        payload = self.form.to_payload()
        if self.form.editing_id is not None:
            result = self._call("updating transaction", self.client.update_transaction, self.form.editing_id, payload)
        else:
            result = self._call("creating transaction", self.client.create_transaction, payload)

        if result is None:
            return False

        self.show_dialog = False
        self.form = TransactionForm()
        self.fetch_transactions()
        self.fetch_stats()
        return True

    def delete(self, transaction_id: int) -> bool:
        if not self.confirm("Are you sure you want to delete this transaction?"):
            return False

        if self._call("deleting transaction", self.client.delete_transaction, transaction_id) is None:
            return False

        self.fetch_transactions()
        self.fetch_stats()
        return True

    # Payment types

    def add_payment_type(self, name: str) -> bool:
        if not name or not name.strip():
            return False

        if self._call("adding payment type", self.client.add_payment_type, name.strip()) is None:
            return False

        self.show_add_payment_type = False
        self.fetch_payment_types()
        return True

    def delete_payment_type(self, payment_type: Dict[str, Any]) -> bool:
        if payment_type.get("is_default"):
            self.error = "Cannot delete default payment types"
            return False

        if not self.confirm("Are you sure you want to delete this payment type?"):
            return False

        if self._call("deleting payment type", self.client.delete_payment_type, payment_type["id"]) is None:
            return False

        self.fetch_payment_types()
        return True

class InvestmentsView:
    """
    Investment transactions with a withdrawn toggle.
    Total and count are summed here over the rows that are still open.
    """

    def __init__(self, client: MoneyMigoClient):
        self.client = client
        self.investments: List[Dict[str, Any]] = []
        self.show_withdrawn = False
        self.total_invested = 0.0
        self.count = 0
        self.error: Optional[str] = None

    def query_params(self) -> Dict[str, Any]:
        params = {"purpose": INVESTMENT}
        if self.show_withdrawn:
            params["includeWithdrawn"] = "true"
        return params

    def fetch(self):
        try:
            data = self.client.get_transactions(self.query_params())
        except ApiError as e:
            logger.warning("Error fetching investments: %s", e.message)
            self.error = e.message
            return

        self.error = None
        self.investments = data

        active = [inv for inv in data if not inv.get("withdrawn")]
        self.total_invested = sum(float(inv["amount"]) for inv in active)
        self.count = len(active)

    def toggle_show_withdrawn(self):
        self.show_withdrawn = not self.show_withdrawn
        self.fetch()

    def withdraw(self, transaction_id: int):
        self._update(self.client.withdraw_investment, transaction_id, "withdrawing investment")

    def reopen(self, transaction_id: int):
        self._update(self.client.reopen_investment, transaction_id, "reopening investment")

    def _update(self, func, transaction_id: int, action: str):
        try:
            func(transaction_id)
        except ApiError as e:
            logger.warning("Error %s: %s", action, e.message)
            self.error = e.message
            return
        self.fetch()
