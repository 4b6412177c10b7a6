from __future__ import annotations

from enum import Enum


class TransactionType(str, Enum):
    INCOME = "Income"
    EXPENSE = "Expense"


# Categories written by the system itself; manual entries may use any string
SALE_CATEGORY = "Sale"
PURCHASE_CATEGORY = "Livestock Purchase"
MEDICATION_CATEGORY = "Medication"
