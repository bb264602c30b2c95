"""Supported display currencies and amount formatting."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List

from tracker.core.schemas import quantize_money


@dataclass(frozen=True)
class Currency:
    code: str
    symbol: str
    name: str
    country: str


CURRENCIES: List[Currency] = [
    Currency("USD", "$", "US Dollar", "United States"),
    Currency("EUR", "€", "Euro", "European Union"),
    Currency("GBP", "£", "British Pound", "United Kingdom"),
    Currency("JPY", "¥", "Japanese Yen", "Japan"),
    Currency("CAD", "C$", "Canadian Dollar", "Canada"),
    Currency("AUD", "A$", "Australian Dollar", "Australia"),
    Currency("CHF", "CHF", "Swiss Franc", "Switzerland"),
    Currency("CNY", "¥", "Chinese Yuan", "China"),
    Currency("INR", "₹", "Indian Rupee", "India"),
    Currency("BRL", "R$", "Brazilian Real", "Brazil"),
    Currency("MXN", "$", "Mexican Peso", "Mexico"),
    Currency("SGD", "S$", "Singapore Dollar", "Singapore"),
    Currency("HKD", "HK$", "Hong Kong Dollar", "Hong Kong"),
    Currency("SEK", "kr", "Swedish Krona", "Sweden"),
    Currency("NOK", "kr", "Norwegian Krone", "Norway"),
    Currency("DKK", "kr", "Danish Krone", "Denmark"),
    Currency("PLN", "zł", "Polish Złoty", "Poland"),
    Currency("CZK", "Kč", "Czech Koruna", "Czech Republic"),
    Currency("HUF", "Ft", "Hungarian Forint", "Hungary"),
    Currency("RUB", "₽", "Russian Ruble", "Russia"),
    Currency("TRY", "₺", "Turkish Lira", "Turkey"),
    Currency("ZAR", "R", "South African Rand", "South Africa"),
    Currency("KRW", "₩", "South Korean Won", "South Korea"),
    Currency("THB", "฿", "Thai Baht", "Thailand"),
    Currency("MYR", "RM", "Malaysian Ringgit", "Malaysia"),
    Currency("IDR", "Rp", "Indonesian Rupiah", "Indonesia"),
    Currency("PHP", "₱", "Philippine Peso", "Philippines"),
    Currency("VND", "₫", "Vietnamese Dong", "Vietnam"),
    Currency("AED", "د.إ", "UAE Dirham", "United Arab Emirates"),
    Currency("SAR", "﷼", "Saudi Riyal", "Saudi Arabia"),
    Currency("EGP", "£", "Egyptian Pound", "Egypt"),
    Currency("NGN", "₦", "Nigerian Naira", "Nigeria"),
    Currency("KES", "KSh", "Kenyan Shilling", "Kenya"),
    Currency("GHS", "₵", "Ghanaian Cedi", "Ghana"),
    Currency("MAD", "د.م.", "Moroccan Dirham", "Morocco"),
    Currency("TND", "د.ت", "Tunisian Dinar", "Tunisia"),
    Currency("DZD", "د.ج", "Algerian Dinar", "Algeria"),
    Currency("LBP", "ل.ل", "Lebanese Pound", "Lebanon"),
    Currency("JOD", "د.ا", "Jordanian Dinar", "Jordan"),
]

BY_CODE: Dict[str, Currency] = {currency.code: currency for currency in CURRENCIES}

# Symbol follows the amount for these
SUFFIX_CODES = frozenset({"SEK", "NOK", "DKK", "PLN", "CZK", "HUF", "TRY"})


def get_currency(code: str, default: str = "USD") -> Currency:
    """Look up a currency by ISO code, falling back to ``default``."""
    return BY_CODE.get(code.upper(), BY_CODE[default])


def format_amount(amount: Decimal, currency: Currency) -> str:
    value = f"{quantize_money(amount):.2f}"
    if currency.code in SUFFIX_CODES:
        return f"{value} {currency.symbol}"
    return f"{currency.symbol}{value}"
