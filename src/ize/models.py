"""Core domain models for flashcard decks."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class RunCategory(Enum):
    """Study-progress bucket holding card ids within a practice run."""

    REMAINING = "remaining"
    WORKING = "working"
    INCORRECT = "incorrect"
    MEMORIZED = "memorized"

    @classmethod
    def from_header(cls, text: str) -> RunCategory | None:
        """Match a run-file header case-insensitively."""
        wanted = text.strip().lower()
        for category in cls:
            if category.value == wanted:
                return category
        return None


@dataclass(frozen=True)
class Card:
    """One flashcard."""

    id: int
    front: str
    back: str


@dataclass
class Deck:
    """Cards keyed by id, plus the file they were loaded from."""

    cards: dict[int, Card] = field(default_factory=dict)
    path: str = ""

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards.values())

    def __contains__(self, card_id: object) -> bool:
        return card_id in self.cards

    def __getitem__(self, card_id: int) -> Card:
        return self.cards[card_id]

    def ids(self) -> set[int]:
        """Return the set of card ids."""
        return set(self.cards)

    def sorted_cards(self) -> list[Card]:
        """Return cards in ascending id order."""
        return [self.cards[card_id] for card_id in sorted(self.cards)]

    def next_id(self) -> int:
        """Return the next unused id."""
        if not self.cards:
            return 0
        return max(self.cards) + 1

    def add(self, front: str, back: str) -> Card:
        """Add a new card under the next unused id."""
        card = Card(id=self.next_id(), front=front, back=back)
        self.replace(card)
        return card

    def replace(self, card: Card) -> None:
        """Store ``card``, overwriting any card with the same id."""
        _check_single_line("front", card.front)
        _check_single_line("back", card.back)
        if card.id < 0:
            raise ValueError(f"Card id must not be negative: {card.id}")
        self.cards[card.id] = card

    def remove(self, card_id: int) -> Card:
        """Remove and return one card."""
        return self.cards.pop(card_id)


def _check_single_line(label: str, text: str) -> None:
    if "\n" in text or "\r" in text:
        raise ValueError(f"Card {label} text must be a single line.")
