"""Error types raised by the deck and practice-run layers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import RunCategory


class FormatError(ValueError):
    """Malformed deck or run file content."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.message = message
        self.line_number = line_number
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)


class IdNotFound(KeyError):
    """A card id was not present in the category it was expected in.

    ``card_id`` is ``None`` when the category was empty and had no last element.
    """

    def __init__(self, card_id: int | None, category: RunCategory) -> None:
        self.card_id = card_id
        self.category = category
        super().__init__(card_id, category)

    def __str__(self) -> str:
        if self.card_id is None:
            return f"No cards in {self.category.value}."
        return f"Card {self.card_id} not found in {self.category.value}."
