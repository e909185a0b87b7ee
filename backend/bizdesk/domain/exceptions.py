"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class EntityInUseError(Exception):
    """Raised when deleting an entity that other records still reference."""

    def __init__(self, entity_type: str, entity_id: str, references: int):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.references = references
        super().__init__(
            f"{entity_type} with id '{entity_id}' is referenced by {references} record(s)"
        )


class InvalidStatusTransitionError(Exception):
    """Raised when a quote or order cannot move from its current status to the target one."""

    def __init__(self, entity_type: str, current: str, target: str):
        self.entity_type = entity_type
        self.current = current
        self.target = target
        super().__init__(f"{entity_type} cannot go from '{current}' to '{target}'")


class BusinessRuleError(Exception):
    """Raised when input is well-formed but violates a business rule."""


class EmptyReportError(Exception):
    """Raised when a report's filters match no rows."""

    def __init__(self, report: str):
        self.report = report
        super().__init__(f"No data found for the {report} report with the given filters")
