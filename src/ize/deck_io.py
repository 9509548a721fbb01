"""Load and save decks in the line-oriented deck text format.

A deck file is a sequence of records separated by blank lines::

    <id>
    <front text>
    <back text>

Ids are unsigned decimal integers. Front and back lines are kept verbatim.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from .errors import FormatError
from .models import Card, Deck
from .textfile import LineCursor, parse_id, read_lines, write_text_atomic


def _read_card(cursor: LineCursor) -> Card | None:
    """Read the next card record, or return None at end of input."""
    if not cursor.skip_blank():
        return None

    id_line = cursor.expect("card id")
    card_id = parse_id(id_line)
    if card_id is None:
        raise FormatError(f"Card id {id_line.strip()!r} must be a number.", cursor.line_number)
    front = cursor.expect(f"front text for card {card_id}")
    back = cursor.expect(f"back text for card {card_id}")
    return Card(id=card_id, front=front, back=back)


def parse_deck(lines: Iterable[str], *, strict: bool = False) -> Deck:
    """Parse deck records from text lines.

    Repeated ids keep the last record unless ``strict`` is set, in which case
    they are rejected.
    """
    cursor = LineCursor(lines)
    cards: dict[int, Card] = {}
    while (card := _read_card(cursor)) is not None:
        if card.id in cards:
            if strict:
                raise FormatError(f"Duplicate card id {card.id}.", cursor.line_number - 2)
            logger.warning("Card id {} appears more than once; keeping the later record", card.id)
        cards[card.id] = card
    return Deck(cards=cards)


def load_deck(path: Path | str, *, strict: bool = False) -> Deck:
    """Load a deck file."""
    deck = parse_deck(read_lines(path), strict=strict)
    deck.path = str(path)
    logger.debug("Loaded {} cards from {}", len(deck), path)
    return deck


def format_deck(deck: Deck) -> str:
    """Render a deck in file format, cards in ascending id order."""
    parts = [""]
    for card in deck.sorted_cards():
        for label, text in (("front", card.front), ("back", card.back)):
            if "\n" in text or "\r" in text:
                raise FormatError(f"Card {card.id} {label} text contains a line break.")
        parts.extend([str(card.id), card.front, card.back, ""])
    return "\n".join(parts) + "\n"


def save_deck(path: Path | str, deck: Deck) -> None:
    """Write a deck file."""
    write_text_atomic(path, format_deck(deck))
    logger.debug("Saved {} cards to {}", len(deck), path)
