"""Errors raised by the SkillSwap service layer."""


class StoreFailure(Exception):
    """A statement against the persistent store did not complete.

    Covers constraint violations, connectivity loss and malformed results
    alike; callers cannot tell them apart and are not expected to.
    """

    def __init__(self, operation: str, message: str | None = None) -> None:
        self.operation = operation
        super().__init__(message or f"Erro ao executar a operação '{operation}'")
