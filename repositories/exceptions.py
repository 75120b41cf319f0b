"""
repositories/exceptions.py
--------------------------
Errors raised by the data access layer.

Constraint violations (duplicate keys, missing foreign keys) are not wrapped:
the driver's ``IntegrityError`` reaches the caller unchanged.
"""


class DataAccessError(Exception):
    """Base class for data access failures."""


class NotFoundError(DataAccessError):
    """A lookup that must return one row matched none."""

    def __init__(self, entity: str, criteria: dict):
        self.entity = entity
        self.criteria = criteria
        super().__init__(f"{entity} not found for {_describe(criteria)}")


class NonUniqueResultError(DataAccessError):
    """A lookup that must return one row matched several."""

    def __init__(self, entity: str, criteria: dict, count: int):
        self.entity = entity
        self.criteria = criteria
        self.count = count
        super().__init__(
            f"Expected one {entity} for {_describe(criteria)}, found {count}"
        )


class MappingError(DataAccessError):
    """A result row is missing a column the mapper needs."""

    def __init__(self, entity: str, column: str):
        self.entity = entity
        self.column = column
        super().__init__(f"Cannot map {entity}: column '{column}' missing from row")


def _describe(criteria: dict) -> str:
    return ", ".join(f"{k}={v!r}" for k, v in criteria.items())
