"""
Domain errors

Every error is local and recoverable. Services raise them, routers turn them
into HTTP responses.
"""


class CmvError(Exception):
    """Base class for all domain errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidQuantity(CmvError):
    """Movement, waste or count with a non-positive or unparsable quantity"""

    def __init__(self, quantity, message: str = None):
        super().__init__(message or f"Invalid quantity: {quantity!r}")
        self.quantity = quantity


class InsufficientPeriodData(CmvError):
    """CMV period cannot be computed from the selected inventory records"""


class UnknownIngredientReference(CmvError):
    """An ingredient id that is no longer present in the catalog"""

    def __init__(self, ingredient_id: str):
        super().__init__(f"Ingredient '{ingredient_id}' not found")
        self.ingredient_id = ingredient_id


class EntityNotFound(CmvError):
    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} '{entity_id}' not found")
        self.entity = entity
        self.entity_id = entity_id


class AuditStateError(CmvError):
    """Audit operation attempted in the wrong state"""


class AdvisoryServiceUnavailable(CmvError):
    """Advisory text service failed or is not configured"""
