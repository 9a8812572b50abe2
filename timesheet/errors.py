from __future__ import annotations


class TimesheetError(Exception):
    """Base error for the timesheet package."""

    message = "Erro inesperado."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(TimesheetError):
    """Raised when a draft cannot be submitted. Never has side effects."""


class MissingField(ValidationError):
    message = "Por favor, preencha todos os campos obrigatórios."


class MissingDescription(ValidationError):
    message = "Por favor, descreva o projeto para a opção 'Outros'."


class InvalidRate(ValidationError):
    message = "Por favor, insira um valor por hora válido."


class InvalidTime(ValidationError):
    message = "Por favor, informe horários no formato HH:MM."


class CollaboratorError(TimesheetError):
    """A fetch or insert against the persistence collaborator failed."""

    def __init__(self, operation: str, detail: str) -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"Falha ao {OPERATION_LABELS.get(operation, operation)}: {detail}")


OPERATION_LABELS = {
    "insert": "salvar o apontamento",
    "select": "carregar os apontamentos",
}
