"""Catalog analytics exceptions."""


class CatalogError(Exception):
    """Base exception for catalog loading and analytics errors."""

    pass


class ParseError(CatalogError):
    """Raised when a numeric field of a row cannot be parsed.

    Attributes:
        show_id: Identifier of the offending row.
        field: Name of the field that failed to parse.
        value: Raw field value.
    """

    def __init__(self, show_id: str, field: str, value: str) -> None:
        self.show_id = show_id
        self.field = field
        self.value = value
        super().__init__(f"Cannot parse {field}={value!r} for show_id={show_id}")


class SchemaError(CatalogError):
    """Raised when loaded data violates the catalog schema.

    Covers missing columns, duplicate show ids and invalid
    required values detected at load time.
    """

    pass
