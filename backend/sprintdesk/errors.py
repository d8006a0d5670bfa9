"""Domain errors surfaced to API callers."""


class SprintDeskError(Exception):
    """Base class; ``status_code`` is what the HTTP layer answers with."""

    status_code = 400

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(SprintDeskError):
    status_code = 404

    def __init__(self, entity: str, entity_id: int | str | None = None) -> None:
        if entity_id is None:
            super().__init__(f"{entity} not found")
        else:
            super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ValidationError(SprintDeskError):
    """A business rule refused the operation."""

    status_code = 400


class ConstraintViolationError(SprintDeskError):
    """Unique key clash (status name, sprint member pair, project name)."""

    status_code = 409


class ImportFileError(SprintDeskError):
    """The uploaded file could not be read as CSV at all."""

    status_code = 400


class CsvParseError(SprintDeskError):
    """A single malformed CSV row. Import skips the row and carries on."""

    def __init__(self, line_number: int, reason: str) -> None:
        super().__init__(f"line {line_number}: {reason}")
        self.line_number = line_number
        self.reason = reason
