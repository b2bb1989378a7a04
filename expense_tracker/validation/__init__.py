"""Manual input validation package."""

from expense_tracker.validation.validator import (
    ExpenseValidator,
    InputValidationError,
    raise_for_errors,
)

__all__ = ["ExpenseValidator", "InputValidationError", "raise_for_errors"]
