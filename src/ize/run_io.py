"""Load and save practice runs.

A run file names its deck, then lists card ids under category headers::

    decks/spanish.deck

    remaining
    4
    7
    working
    incorrect
    2
    memorized

Headers are matched case-insensitively. An id list ends at the first line
that is not a number. The deck path is used as written, so a relative path
is taken from the working directory, not from the run file's location.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from .deck_io import load_deck
from .errors import FormatError
from .models import Deck, RunCategory
from .practice_run import PracticeRun
from .textfile import LineCursor, parse_id, read_lines, write_text_atomic

# Scan order for duplicate detection and stale-id removal.
_CHECK_ORDER = (RunCategory.REMAINING, RunCategory.INCORRECT, RunCategory.MEMORIZED, RunCategory.WORKING)
# Section order written to run files.
_SAVE_ORDER = (RunCategory.REMAINING, RunCategory.WORKING, RunCategory.INCORRECT, RunCategory.MEMORIZED)


@dataclass(frozen=True)
class ReconcileReport:
    """Ids changed while aligning a run with its deck."""

    added: tuple[int, ...]
    removed: tuple[int, ...]


def _read_id_list(cursor: LineCursor) -> list[int]:
    """Consume consecutive id lines, leaving the first non-id line unread."""
    ids: list[int] = []
    while (line := cursor.peek()) is not None:
        card_id = parse_id(line)
        if card_id is None:
            break
        cursor.advance()
        ids.append(card_id)
    return ids


def parse_run(lines: Iterable[str]) -> PracticeRun:
    """Parse run file lines into an unreconciled run."""
    cursor = LineCursor(lines)
    run = PracticeRun()

    if not cursor.skip_blank():
        raise FormatError("Expected deck file path.", cursor.line_number + 1)
    run.deck_path = cursor.expect("deck file path")

    while cursor.skip_blank():
        header = cursor.expect("category header")
        category = RunCategory.from_header(header)
        if category is None:
            raise FormatError(f"Unexpected heading {header.strip()!r}.", cursor.line_number)
        run.category(category).extend(_read_id_list(cursor))

    return run


def check_duplicates(run: PracticeRun) -> set[int]:
    """Return every tracked id, failing if any id is listed more than once."""
    seen: set[int] = set()
    for category in _CHECK_ORDER:
        for card_id in run.category(category):
            if card_id in seen:
                raise FormatError(f"Run file invalid: id {card_id} found in multiple locations.")
            seen.add(card_id)
    return seen


def _remove_id(run: PracticeRun, card_id: int) -> None:
    for category in _CHECK_ORDER:
        ids = run.category(category)
        if card_id in ids:
            ids.remove(card_id)
            return


def reconcile(run: PracticeRun, deck: Deck) -> ReconcileReport:
    """Align the ids tracked by ``run`` with the cards in ``deck``.

    New deck cards join ``remaining``; ids no longer in the deck are dropped.
    """
    tracked = check_duplicates(run)
    added = tuple(sorted(deck.ids() - tracked))
    removed = tuple(sorted(tracked - deck.ids()))

    run.remaining.extend(added)
    for card_id in removed:
        _remove_id(run, card_id)

    if added or removed:
        logger.info("Reconciled run with deck: {} added, {} removed", len(added), len(removed))
    return ReconcileReport(added=added, removed=removed)


def load_practice_run(path: Path | str) -> tuple[PracticeRun, Deck]:
    """Load a run file and the deck it refers to, reconciled with each other."""
    run_path = Path(path).resolve(strict=True)
    run = parse_run(read_lines(run_path))
    run.last_save_path = str(run_path)
    check_duplicates(run)

    deck = load_deck(run.deck_path)
    reconcile(run, deck)
    logger.debug("Loaded run {} for deck {}", run_path, run.deck_path)
    return run, deck


def format_run(run: PracticeRun) -> str:
    """Render a run in file format with each category sorted ascending."""
    lines = ["", run.deck_path, ""]
    for category in _SAVE_ORDER:
        lines.append(category.value)
        lines.extend(str(card_id) for card_id in sorted(run.category(category)))
    lines.append("")
    return "\n".join(lines) + "\n"


def save_practice_run(path: Path | str, run: PracticeRun) -> None:
    """Write a run file."""
    write_text_atomic(path, format_run(run))
    logger.debug("Saved run to {}", path)
