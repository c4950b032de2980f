# shop/domain/errors.py


class DomainError(Exception):
    """Bazowy blad domeny, message trafia do odpowiedzi HTTP."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    """Encja o podanym ID nie istnieje."""


class InvalidArgumentError(DomainError):
    """Zle ID, zduplikowane pole unikalne albo zlamana regula biznesowa (np. brak stocku)."""


class ConflictError(DomainError):
    """Ta sama operacja jest wlasnie wykonywana (np. zamowienie z tym samym Idempotency-Key)."""
