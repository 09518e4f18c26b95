"""
Seating engine exceptions

Raised by the services and translated to HTTP responses by the handlers
registered in weddingflow.main.

    SeatingError (base)        -> 500
    ├── NotFoundError          -> 404
    ├── CapacityExceededError  -> 409
    ├── TableOccupiedError     -> 409
    ├── SeatingValidationError -> 400
    ├── ForbiddenError         -> 403
    └── InternalFailureError   -> 500
"""

from typing import Any, Dict, Optional


class SeatingError(Exception):
    """Base exception for all seating engine errors"""

    status_code = 500
    error_code = "seating_error"

    def __init__(self, message: str = "An unexpected error occurred", context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(SeatingError):
    """A floor plan, table, guest or version does not exist"""

    status_code = 404
    error_code = "not_found"

    def __init__(self, resource: str, resource_id: Optional[Any] = None):
        message = f"{resource} not found"
        context: Dict[str, Any] = {"resource": resource}
        if resource_id is not None:
            message = f"{resource} '{resource_id}' not found"
            context["resource_id"] = str(resource_id)
        super().__init__(message=message, context=context)


class CapacityExceededError(SeatingError):
    """A table would hold more guests than its capacity"""

    status_code = 409
    error_code = "capacity_exceeded"

    def __init__(self, table_label: str, capacity: int, table_id: Optional[Any] = None):
        context: Dict[str, Any] = {"table": table_label, "capacity": capacity}
        if table_id is not None:
            context["table_id"] = str(table_id)
        super().__init__(
            message=f"Table {table_label} would exceed capacity ({capacity})",
            context=context,
        )
        self.table_label = table_label
        self.capacity = capacity


class TableOccupiedError(SeatingError):
    """A table still has guests assigned and cannot be deleted"""

    status_code = 409
    error_code = "table_occupied"

    def __init__(self, table_label: str, occupants: int):
        super().__init__(
            message=f"Table {table_label} still has {occupants} guest(s) assigned",
            context={"table": table_label, "occupants": occupants},
        )


class SeatingValidationError(SeatingError):
    """Input is well-formed but violates a seating rule"""

    status_code = 400
    error_code = "validation_error"


class ForbiddenError(SeatingError):
    """The resource belongs to another company"""

    status_code = 403
    error_code = "forbidden"

    def __init__(self, message: str = "Access denied"):
        super().__init__(message=message)


class InternalFailureError(SeatingError):
    """Storage layer failure, e.g. an aborted transaction"""

    status_code = 500
    error_code = "internal_failure"
