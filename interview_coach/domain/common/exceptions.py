"""
Errors raised by entities and domain services.

The API layer maps each family to a status code: validation problems to 400,
missing entities to 404, broken business rules to 409 and authorization
failures to 403. ``message`` is always safe to show to the candidate.
"""


class DomainError(Exception):
    """Base for every domain error; ``details`` carries structured context for logs."""

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value!r}" for key, value in self.details.items())
        return f"{self.message} ({context})"


class ValidationError(DomainError):
    """Input that an entity refuses, e.g. an unknown category or a two-word prompt."""

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details: dict[str, object] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class EntityNotFoundError(DomainError):
    """A referenced entity does not exist or is not visible to the caller."""

    def __init__(self, entity_type: str, entity_id: object, message: str | None = None) -> None:
        super().__init__(
            message or f"{entity_type} {entity_id} not found.",
            {"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class BusinessRuleViolationError(DomainError):
    """
    The request is well formed but conflicts with current state.

    ``rule`` is a stable identifier such as ``unique_email`` or ``payment_window``.
    """

    def __init__(self, rule: str, message: str | None = None) -> None:
        super().__init__(message or f"Business rule violated: {rule}", {"rule": rule})
        self.rule = rule


class AuthorizationError(DomainError):
    """The account may not perform the operation (suspended, not an admin, ...)."""

    def __init__(self, message: str = "Not authorized to perform this action") -> None:
        super().__init__(message)
