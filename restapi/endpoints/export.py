"""CSV export and import endpoints for transactions."""

import logging
from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import Response

from restapi.dependencies import get_storage
from tracker.storage.base import Storage
from tracker.transaction import schemas
from tracker.transaction.csv_io import CsvFormatError, parse_transactions_csv, transactions_to_csv

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["import/export"])


@router.get("/export/transactions", response_class=Response)
async def export_transactions(storage: Storage = Depends(get_storage)):
    """Download every transaction as `transactions.csv`, newest first."""
    transactions = await storage.get_transactions()
    return Response(
        content=transactions_to_csv(transactions),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=transactions.csv"},
    )


@router.post("/import/transactions", response_model=schemas.ImportResponse)
async def import_transactions(
    file: UploadFile = File(...),
    storage: Storage = Depends(get_storage),
):
    """
    Import transactions from a CSV file.

    The CSV file must have the same columns as the export:
    - Date: YYYY-MM-DD or a full ISO timestamp
    - Type: income, expense, business or loan
    - Category: category name
    - Description: free text, may be empty
    - Amount: amount with at most two decimals

    Every row is validated first. If any row is invalid nothing is stored
    and the rejected rows are listed.
    """
    if not file.filename or not file.filename.lower().endswith('.csv'):
        return schemas.ImportResponse(
            success=False,
            message="Invalid file format. Only CSV files (.csv) are supported."
        )

    content = await file.read()
    try:
        transactions, errors = parse_transactions_csv(content)
    except CsvFormatError as e:
        return schemas.ImportResponse(success=False, message=str(e))

    if errors:
        logger.info("Rejected CSV import %s: %d invalid rows", file.filename, len(errors))
        return schemas.ImportResponse(
            success=False,
            message=f"Found {len(errors)} invalid rows, nothing was imported",
            errors=[schemas.ImportRowError(**error) for error in errors],
        )

    await storage.create_transactions(transactions)

    logger.info("Imported %d transactions from %s", len(transactions), file.filename)
    return schemas.ImportResponse(
        success=True,
        message=f"Successfully imported {len(transactions)} transactions",
        imported=len(transactions),
    )
