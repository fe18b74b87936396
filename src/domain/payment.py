"""Czech Bank Payment Helpers

Account number to IBAN conversion and the Short Payment Descriptor (SPAYD)
string that Czech banking apps read from payment QR codes.
"""

import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

_ACCOUNT_PATTERN = re.compile(r"^((?:[0-9]{0,6}-)?[0-9]{1,10})/([0-9]{4})$")
_CZ_IBAN_PATTERN = re.compile(r"^CZ[0-9]{22}$")
# "CZ" as digits (C=12, Z=35) followed by placeholder check digits
_CZ_NUMERIC_SUFFIX = "123500"
_MESSAGE_LIMIT = 60


def convert_czech_account_to_iban(account: str) -> Optional[str]:
    """
    Convert "prefix-number/bank" to a CZ IBAN

    Returns the input unchanged if it already is a CZ IBAN, None if it is
    neither format.
    """
    clean = re.sub(r"\s", "", account or "")
    match = _ACCOUNT_PATTERN.match(clean)
    if not match:
        return clean if _CZ_IBAN_PATTERN.match(clean) else None

    full_number, bank_code = match.groups()
    prefix, _, number = full_number.rpartition("-")

    bban = f"{bank_code.zfill(4)}{prefix.zfill(6)}{number.zfill(10)}"
    remainder = int(f"{bban}{_CZ_NUMERIC_SUFFIX}") % 97
    check_digits = f"{98 - remainder:02d}"
    return f"CZ{check_digits}{bban}"


def build_spayd(
    account: str,
    amount: Decimal,
    currency: str = "CZK",
    vs: Optional[str] = None,
    ks: Optional[str] = None,
    ss: Optional[str] = None,
    message: Optional[str] = None,
) -> Optional[str]:
    """Build the SPAYD payment string, or None if the account is unusable"""
    iban = convert_czech_account_to_iban(account)
    if not iban:
        return None

    formatted_amount = Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    spayd = f"SPD*1.0*ACC:{iban}*AM:{formatted_amount}*CC:{currency}"

    if vs:
        spayd += f"*X-VS:{vs}"
    if ks:
        spayd += f"*X-KS:{ks}"
    if ss:
        spayd += f"*X-SS:{ss}"
    if message:
        spayd += f"*MSG:{message.upper()[:_MESSAGE_LIMIT]}"

    return spayd
