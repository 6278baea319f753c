from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.dialects import mysql

from moneymigo.models.transaction import Transaction
from moneymigo.schemas.transaction import TransactionFilters
from moneymigo.services.payment_type_service import normalize_name
from moneymigo.services.transaction_service import apply_filters, to_number

def compile_mysql(query):
    return str(query.compile(dialect=mysql.dialect()))

def test_to_number():
    assert to_number(Decimal("12.50")) == 12.5
    assert to_number("7") == 7.0
    assert to_number(None) == 0
    assert to_number("not a number") == 0
    assert to_number("nan") == 0
    assert to_number("inf") == 0
    assert isinstance(to_number(0.1), Decimal)
    assert to_number(0.1) == Decimal("0.1")

def test_filters_defaults():
    filters = TransactionFilters()

    assert filters.sort_order == "desc"
    assert filters.include_withdrawn == False
    assert filters.start_date is None

def test_filters_from_query_names():
    filters = TransactionFilters(
        startDate="2024-03-01",
        endDate="2024-03-31",
        sortOrder="ASC",
        includeWithdrawn="true"
    )

    assert filters.start_date == date(2024, 3, 1)
    assert filters.end_date == date(2024, 3, 31)
    assert filters.sort_order == "asc"
    assert filters.include_withdrawn == True

def test_filters_loose_flags():
    assert TransactionFilters(sortOrder="newest").sort_order == "desc"
    assert TransactionFilters(sortOrder=" asc ").sort_order == "asc"
    assert TransactionFilters(includeWithdrawn="1").include_withdrawn == False
    assert TransactionFilters(includeWithdrawn="yes").include_withdrawn == False
    assert TransactionFilters(includeWithdrawn="TRUE").include_withdrawn == True

def test_filters_reject_bad_month():
    with pytest.raises(ValidationError):
        TransactionFilters(month=13)

def test_withdrawn_excluded_unless_requested():
    filters = TransactionFilters()

    hidden = compile_mysql(apply_filters(select(Transaction), filters))
    shown = compile_mysql(apply_filters(select(Transaction), filters, include_withdrawn=True))

    assert "withdrawn IS NULL" in hidden
    assert "withdrawn" not in shown.split("FROM")[1]

def test_date_range_uses_between():
    filters = TransactionFilters(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31))

    sql = compile_mysql(apply_filters(select(Transaction), filters, include_withdrawn=True))

    assert "BETWEEN" in sql

def test_month_and_year_use_extract():
    filters = TransactionFilters(month=3, year=2024, purpose="salary")

    sql = compile_mysql(apply_filters(select(Transaction), filters, include_withdrawn=True))

    assert "EXTRACT(month FROM transactions.transaction_date)" in sql
    assert "EXTRACT(year FROM transactions.transaction_date)" in sql
    assert "transactions.purpose = " in sql

def test_normalize_name():
    assert normalize_name("  HDFC_Debit ") == "hdfc_debit"
    assert normalize_name("   ") == ""
    assert normalize_name(None) == ""
