"""Invoicing error codes

Stable codes carried in libs.result.Error; the API maps them to HTTP
status codes.
"""

from libs.result import Error

NO_BILLABLE_ENTRIES = "NO_BILLABLE_ENTRIES"
ENTRY_ALREADY_CLAIMED = "ENTRY_ALREADY_CLAIMED"
ENTRY_CLIENT_MISMATCH = "ENTRY_CLIENT_MISMATCH"
ENTRY_NOT_FOUND = "ENTRY_NOT_FOUND"
CLIENT_NOT_FOUND = "CLIENT_NOT_FOUND"
INVOICE_NOT_FOUND = "INVOICE_NOT_FOUND"
INVALID_TRANSITION = "INVALID_TRANSITION"
INVALID_STATUS = "INVALID_STATUS"
PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"


def invoice_not_found(invoice_id: int) -> Error:
    return Error(
        code=INVOICE_NOT_FOUND,
        message=f"Invoice with ID {invoice_id} not found",
        reason="Invoice does not exist",
    )


def persistence_failure(message: str, exc: Exception) -> Error:
    return Error(code=PERSISTENCE_FAILURE, message=message, reason=str(exc))
