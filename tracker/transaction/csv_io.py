"""CSV export and import of transactions."""

import csv
import io
from typing import Dict, Iterable, List, Tuple

import pandas as pd
from pydantic import ValidationError

from tracker.transaction.schemas import Transaction, TransactionCreate

CSV_COLUMNS = ["Date", "Type", "Category", "Description", "Amount"]


class CsvFormatError(Exception):
    """The file cannot be read as a transactions CSV at all."""


def transactions_to_csv(transactions: Iterable[Transaction]) -> str:
    """Render transactions with standard CSV quoting (embedded quotes doubled)."""
    frame = pd.DataFrame(
        [
            {
                "Date": transaction.date.strftime("%Y-%m-%d"),
                "Type": transaction.type,
                "Category": transaction.category,
                "Description": transaction.description,
                "Amount": f"{transaction.amount:.2f}",
            }
            for transaction in transactions
        ],
        columns=CSV_COLUMNS,
    )
    return frame.to_csv(index=False, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")


def _describe(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in item['loc']) or 'row'}: {item['msg']}"
        for item in error.errors()
    )


def parse_transactions_csv(content: bytes) -> Tuple[List[TransactionCreate], List[Dict]]:
    """
    Validate every row of an uploaded CSV.

    Returns:
        Tuple containing:
        - Valid transactions, in file order
        - Errors as {"row": n, "message": ...}; row 2 is the first data row
    """
    try:
        frame = pd.read_csv(io.BytesIO(content), dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError as e:
        raise CsvFormatError("CSV file is empty") from e
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise CsvFormatError(f"Error processing file: {e}") from e

    missing = [column for column in CSV_COLUMNS if column not in frame.columns]
    if missing:
        raise CsvFormatError(f"CSV file must contain {', '.join(CSV_COLUMNS)} columns")

    transactions = []
    errors = []
    for row_num, row in enumerate(frame.to_dict("records"), start=2):  # Header is row 1
        try:
            transactions.append(TransactionCreate(
                type=row["Type"].strip().lower(),
                amount=row["Amount"].strip(),
                category=row["Category"].strip(),
                description=row["Description"],
                date=row["Date"].strip(),
            ))
        except ValidationError as e:
            errors.append({"row": row_num, "message": _describe(e)})

    return transactions, errors
