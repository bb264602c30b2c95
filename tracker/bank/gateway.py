"""Plaid client wrapper for bank linking and transaction fetches."""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

import plaid
from plaid.api import plaid_api
from plaid.model.accounts_get_request import AccountsGetRequest
from plaid.model.country_code import CountryCode
from plaid.model.item_public_token_exchange_request import ItemPublicTokenExchangeRequest
from plaid.model.link_token_create_request import LinkTokenCreateRequest
from plaid.model.link_token_create_request_user import LinkTokenCreateRequestUser
from plaid.model.products import Products
from plaid.model.transactions_get_request import TransactionsGetRequest
from plaid.model.transactions_get_request_options import TransactionsGetRequestOptions

from tracker.bank.schemas import BankAccountData, BankTransactionData

ENVIRONMENTS = {
    "sandbox": plaid.Environment.Sandbox,
    "production": plaid.Environment.Production,
}

CLIENT_NAME = "Finance Tracker"
PAGE_SIZE = 100


def _category_name(transaction: Dict[str, Any]) -> str:
    """Readable category from Plaid's personal finance category."""
    pfc = transaction.get("personal_finance_category") or {}
    primary = pfc.get("primary")
    if primary:
        return primary.replace("_", " ").title()
    legacy = transaction.get("category") or []
    return legacy[0] if legacy else "Other Expenses"


def _to_account(account: Dict[str, Any], institution_name: Optional[str] = None) -> BankAccountData:
    balances = account.get("balances") or {}
    return BankAccountData(
        account_id=account["account_id"],
        name=account["name"],
        official_name=account.get("official_name"),
        type=str(account["type"]),
        subtype=str(account["subtype"]) if account.get("subtype") else None,
        mask=account.get("mask"),
        current_balance=_decimal(balances.get("current")),
        available_balance=_decimal(balances.get("available")),
        iso_currency_code=balances.get("iso_currency_code") or "USD",
        institution_name=institution_name,
    )


def _to_transaction(transaction: Dict[str, Any]) -> BankTransactionData:
    posted = transaction["date"]
    if isinstance(posted, str):
        posted = date.fromisoformat(posted)
    return BankTransactionData(
        transaction_id=transaction["transaction_id"],
        amount=_decimal(transaction["amount"]),
        name=transaction["name"],
        merchant_name=transaction.get("merchant_name"),
        category=_category_name(transaction),
        date=datetime.combine(posted, time.min),
        pending=bool(transaction.get("pending")),
    )


def _decimal(value) -> Optional[Decimal]:
    # Plaid amounts arrive as floats
    return Decimal(str(value)) if value is not None else None


class PlaidGateway:
    """Blocking Plaid calls; endpoints run them in the thread pool."""

    def __init__(self, client_id: str, secret: str, environment: str = "sandbox") -> None:
        if environment not in ENVIRONMENTS:
            raise ValueError(f"Unknown Plaid environment {environment!r}")
        configuration = plaid.Configuration(
            host=ENVIRONMENTS[environment],
            api_key={"clientId": client_id, "secret": secret},
        )
        self.client = plaid_api.PlaidApi(plaid.ApiClient(configuration))

    def create_link_token(self, user_id: int) -> str:
        request = LinkTokenCreateRequest(
            products=[Products("transactions")],
            client_name=CLIENT_NAME,
            country_codes=[CountryCode("US")],
            language="en",
            user=LinkTokenCreateRequestUser(client_user_id=str(user_id)),
        )
        response = self.client.link_token_create(request)
        return response["link_token"]

    def exchange_public_token(self, public_token: str) -> Tuple[str, str]:
        """Trade a Link public token for (access_token, item_id)."""
        response = self.client.item_public_token_exchange(
            ItemPublicTokenExchangeRequest(public_token=public_token)
        )
        return response["access_token"], response["item_id"]

    def get_accounts(self, access_token: str, institution_name: Optional[str] = None) -> List[BankAccountData]:
        response = self.client.accounts_get(AccountsGetRequest(access_token=access_token)).to_dict()
        return [_to_account(account, institution_name) for account in response["accounts"]]

    def get_transactions(
        self, access_token: str, account_id: str, start_date: date, end_date: date
    ) -> List[BankTransactionData]:
        """Fetch every transaction of one account in [start_date, end_date]."""
        transactions: List[Dict[str, Any]] = []
        while True:
            request = TransactionsGetRequest(
                access_token=access_token,
                start_date=start_date,
                end_date=end_date,
                options=TransactionsGetRequestOptions(
                    account_ids=[account_id],
                    count=PAGE_SIZE,
                    offset=len(transactions),
                ),
            )
            response = self.client.transactions_get(request).to_dict()
            transactions.extend(response["transactions"])
            if not response["transactions"] or len(transactions) >= response["total_transactions"]:
                break
        return [_to_transaction(transaction) for transaction in transactions]
