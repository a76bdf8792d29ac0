"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and display
user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A request field is missing or malformed."""


class InvalidQuantityError(ValidationError):
    """A pack quantity is zero, negative or not an integer."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class FlavorNotFoundError(EntityNotFoundError):
    pass


class InvalidRecipeError(EntityNotFoundError):
    """The requested pack recipe does not exist."""


class CartLineNotFoundError(EntityNotFoundError):
    pass


class BusinessRuleViolation(DomainException):
    """The request is well-formed but the current state forbids it."""


class RecipeInactiveError(BusinessRuleViolation):
    pass


class InvalidCompositionError(BusinessRuleViolation):
    """Recipe item quantities do not add up to the pack size."""


class FlavorInUseError(BusinessRuleViolation):
    pass


class RecipeInUseError(BusinessRuleViolation):
    pass


class InsufficientStockError(BusinessRuleViolation):
    """A flavor cannot cover the units a request needs.

    Carries the limiting flavor and the shortfall so callers can build
    corrective messages.
    """

    def __init__(self, flavor_name: str, available: int, required: int) -> None:
        self.flavor_name = flavor_name
        self.available = available
        self.required = required
        super().__init__(
            f"Insufficient stock for {flavor_name}. "
            f"Available: {available}, Required: {required}"
        )


class DuplicateCartLineError(DomainException):
    """A concurrent request created the same (user, product, recipe) line."""
