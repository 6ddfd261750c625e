"""Custom exceptions for the inventory package."""


class InventoryError(Exception):
    """Base exception for inventory errors."""

    pass


class InvalidEntityError(InventoryError, ValueError):
    """Raised when an entity or argument fails validation."""

    pass


class DuplicateBarcodeError(InvalidEntityError):
    """Raised when a barcode value is already in use."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Barcode value '{value}' already exists")


class BarcodeMismatchError(InvalidEntityError):
    """Raised when a barcode does not belong to the given product."""

    def __init__(self, product_id: int, barcode_id: int):
        self.product_id = product_id
        self.barcode_id = barcode_id
        super().__init__(f"Barcode {barcode_id} does not belong to product {product_id}")


class BarcodeAlreadyAssignedError(InvalidEntityError):
    """Raised when a barcode would end up referenced by two products, or a product would get two barcodes."""

    pass


class ConstraintViolationError(InvalidEntityError):
    """Raised when the database rejects a write (UNIQUE, FK or CHECK constraint)."""

    pass


class NotFoundError(InventoryError):
    """Raised when no active row matches an id."""

    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"No active {entity} found with ID: {entity_id}")


class LifecycleError(InventoryError):
    """Raised on an invalid active -> eliminated transition."""

    pass
