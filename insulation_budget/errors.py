"""
Budget flow errors.

Two kinds only: the input failed validation, or a customer/bag lookup
missed. Both end the request. Handlers dispatch on `kind`, never on the
exception class.
"""

import enum


class BudgetErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"


class BudgetError(Exception):
    kind: BudgetErrorKind
    status_code: int

    def __init__(self, errors: dict):
        self.errors = errors
        super().__init__(self.message)

    @property
    def message(self) -> str:
        """All messages flattened, in field order."""
        return " ".join(m for messages in self.errors.values() for m in messages)

    def to_dict(self) -> dict:
        return {"error": self.kind.value, "errors": self.errors, "detail": self.message}


class BudgetValidationError(BudgetError):
    kind = BudgetErrorKind.VALIDATION
    status_code = 422


class BudgetNotFoundError(BudgetError):
    kind = BudgetErrorKind.NOT_FOUND
    status_code = 404

    def __init__(self, message: str):
        super().__init__({"_": [message]})
