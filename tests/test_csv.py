from datetime import datetime
from decimal import Decimal

import pytest

from tracker.transaction.csv_io import CsvFormatError, parse_transactions_csv, transactions_to_csv
from tracker.transaction.schemas import Transaction


def make_transaction(**overrides):
    fields = dict(
        id=1,
        type="expense",
        amount=Decimal("3.50"),
        category="Food & Dining",
        description="Coffee",
        date=datetime(2024, 3, 5, 8, 30),
        created_at=datetime(2024, 3, 5, 9),
    )
    fields.update(overrides)
    return Transaction(**fields)


def test_export_header_and_row():
    lines = transactions_to_csv([make_transaction()]).splitlines()

    assert lines == [
        "Date,Type,Category,Description,Amount",
        "2024-03-05,expense,Food & Dining,Coffee,3.50",
    ]


def test_export_quotes_embedded_commas_and_quotes():
    csv_text = transactions_to_csv([make_transaction(description='Coffee, "nice"')])

    assert csv_text.splitlines()[1] == '2024-03-05,expense,Food & Dining,"Coffee, ""nice""",3.50'


def test_export_of_nothing_is_just_the_header():
    assert transactions_to_csv([]) == "Date,Type,Category,Description,Amount\n"


def test_parse_valid_rows():
    content = (
        "Date,Type,Category,Description,Amount\n"
        '2024-03-05,Expense,Food,"Coffee, ""nice""",3.5\n'
        "2024-03-06,income,Salary,,1000\n"
    ).encode()

    transactions, errors = parse_transactions_csv(content)

    assert errors == []
    assert [t.type for t in transactions] == ["expense", "income"]
    assert transactions[0].description == 'Coffee, "nice"'
    assert transactions[0].amount == Decimal("3.50")
    assert transactions[1].description == ""
    assert transactions[1].date == datetime(2024, 3, 6)


def test_parse_reports_each_bad_row():
    content = (
        "Date,Type,Category,Description,Amount\n"
        "2024-03-05,expense,Food,ok,3.50\n"
        "not-a-date,expense,Food,bad date,3.50\n"
        "2024-03-07,gift,Food,bad type,3.50\n"
    ).encode()

    transactions, errors = parse_transactions_csv(content)

    assert len(transactions) == 1
    assert [error["row"] for error in errors] == [3, 4]


def test_parse_rejects_missing_columns():
    with pytest.raises(CsvFormatError):
        parse_transactions_csv(b"Date,Amount\n2024-03-05,1\n")


def test_parse_rejects_empty_file():
    with pytest.raises(CsvFormatError):
        parse_transactions_csv(b"")
