"""Invoice number format: <year>-<4 digit sequence>, e.g. 2025-0007"""


def format_invoice_number(year: int, sequence: int) -> str:
    return f"{year}-{sequence:04d}"


def variable_symbol_for(invoice_number: str) -> str:
    """Default variable symbol: the invoice number without dashes"""
    return invoice_number.replace("-", "")
