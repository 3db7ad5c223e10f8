"""
Store module exceptions.

Only integrity violations are exceptions. A lookup miss is a normal
result (None / False), never one of these.
"""

from shared.exceptions import IntegrityError


class DuplicateEntityError(IntegrityError):
    """Raised when a create would duplicate a unique key."""

    def __init__(self, entity: str, field: str, value: str):
        super().__init__(
            f"{entity} with {field}={value!r} already exists",
            code="DUPLICATE_ENTITY",
            details={"entity": entity, "field": field, "value": value},
        )
        self.entity = entity
        self.field = field
        self.value = value


class UnknownReferenceError(IntegrityError):
    """Raised when a record references an entity that does not exist."""

    def __init__(self, entity: str, field: str, value: str):
        super().__init__(
            f"{entity}.{field} references unknown record {value!r}",
            code="UNKNOWN_REFERENCE",
            details={"entity": entity, "field": field, "value": value},
        )
        self.entity = entity
        self.field = field
        self.value = value
