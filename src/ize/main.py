"""CLI entrypoint for the flashcard study shell."""

from __future__ import annotations

import argparse
import random
from collections.abc import Callable
from pathlib import Path

from loguru import logger

from .deck_io import load_deck, save_deck
from .errors import FormatError
from .logging_config import DEFAULT_LEVEL, configure_logging
from .models import Deck, RunCategory
from .service import StudySession
from .textfile import parse_id

InputFn = Callable[[str], str]
PrintFn = Callable[[str], None]
MENU_QUIT_COMMANDS = {"q"}
MENU_BACK_COMMANDS = {"b"}
FLIP_COMMANDS = {"f", ""}
ANSWER_KEYS = {
    "1": RunCategory.REMAINING,
    "2": RunCategory.INCORRECT,
    "3": RunCategory.WORKING,
    "4": RunCategory.MEMORIZED,
}
PILE_KEYS = {
    RunCategory.INCORRECT: "i",
    RunCategory.WORKING: "w",
    RunCategory.MEMORIZED: "m",
}
FILE_ERRORS = (OSError, FormatError)


def run(argv: list[str] | None = None) -> int:
    """Run the CLI application."""
    parser = argparse.ArgumentParser(prog="ize", description="Flashcard decks with resumable practice runs")
    parser.add_argument("run_file", nargs="?", help="practice run file to resume")
    parser.add_argument("--seed", type=int, default=None, help="seed for reproducible shuffling")
    parser.add_argument(
        "--log-level",
        default=DEFAULT_LEVEL,
        choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
    )
    parser.add_argument("--log-file", type=Path, default=None)
    args = parser.parse_args(argv)

    configure_logging(args.log_level, args.log_file)
    rng = random.Random(args.seed)
    if args.run_file:
        return resume_and_play(args.run_file, rng=rng)
    return play_shell(rng=rng)


def resume_and_play(
    run_file: str, input_fn: InputFn = input, print_fn: PrintFn = print, rng: random.Random | None = None
) -> int:
    """Resume a run file given on the command line, then return to the menu."""
    try:
        session = StudySession.resume(run_file, rng=rng)
    except FILE_ERRORS as exc:
        print_fn(f"Error: {exc}")
        return 1
    _practice_flow(session, input_fn, print_fn)
    return play_shell(input_fn, print_fn, rng=rng)


def play_shell(input_fn: InputFn = input, print_fn: PrintFn = print, rng: random.Random | None = None) -> int:
    """Run persistent menu-driven shell."""
    while True:
        print_fn("\n=== Select Activity ===")
        print_fn("1) New run")
        print_fn("2) Resume run")
        print_fn("3) New deck")
        print_fn("4) Edit deck")
        print_fn("q) Quit")
        choice = input_fn("Choose: ").strip().lower()

        if choice == "1":
            _new_run_flow(input_fn, print_fn, rng)
        elif choice == "2":
            _resume_run_flow(input_fn, print_fn, rng)
        elif choice == "3":
            _new_deck_flow(input_fn, print_fn)
        elif choice == "4":
            _edit_deck_flow(input_fn, print_fn)
        elif choice in MENU_QUIT_COMMANDS:
            return 0
        else:
            print_fn("Invalid choice.")


def _new_run_flow(input_fn: InputFn, print_fn: PrintFn, rng: random.Random | None) -> None:
    """Start studying every card of a deck file."""
    deck_path = input_fn("Deck file: ").strip()
    if not deck_path:
        return
    try:
        session = StudySession.start(deck_path, rng=rng)
    except FILE_ERRORS as exc:
        print_fn(f"Error: {exc}")
        return
    if session.is_done():
        print_fn("Deck has no cards.")
        return
    _practice_flow(session, input_fn, print_fn)


def _resume_run_flow(input_fn: InputFn, print_fn: PrintFn, rng: random.Random | None) -> None:
    """Continue a saved run file."""
    run_path = input_fn("Run file: ").strip()
    if not run_path:
        return
    try:
        session = StudySession.resume(run_path, rng=rng)
    except FILE_ERRORS as exc:
        print_fn(f"Error: {exc}")
        return
    _practice_flow(session, input_fn, print_fn)


def _practice_flow(session: StudySession, input_fn: InputFn, print_fn: PrintFn) -> None:
    """Show cards until the user leaves the run."""
    while True:
        if session.is_done():
            if not _done_flow(session, input_fn, print_fn):
                return
            continue

        answered, total = session.progress()
        print_fn(f"\n--- {session.side.value} ({answered} / {total}) ---")
        print_fn(session.visible_text())
        choice = input_fn("[f]lip 1)Skip 2)Incorrect 3)Working 4)Memorized q)Quit: ").strip().lower()

        if choice in FLIP_COMMANDS:
            session.flip()
        elif choice in ANSWER_KEYS:
            session.answer(ANSWER_KEYS[choice])
        elif choice in MENU_QUIT_COMMANDS:
            _save_prompt(session, input_fn, print_fn)
            return
        else:
            print_fn("Invalid choice.")


def _done_flow(session: StudySession, input_fn: InputFn, print_fn: PrintFn) -> bool:
    """Ask which pile to study next; return False when the user quits."""
    piles = session.pile_counts()
    print_fn("\n=== Which pile to reshuffle? ===")
    print_fn(f"a) All ({sum(pile.count for pile in piles)})")
    available: dict[str, RunCategory | None] = {"a": None}
    for pile in piles:
        if pile.count > 0:
            key = PILE_KEYS[pile.category]
            print_fn(f"{key}) {pile.category.value.capitalize()} ({pile.count})")
            available[key] = pile.category
    print_fn("q) Quit")

    while True:
        choice = input_fn("Choose: ").strip().lower()
        if choice in MENU_QUIT_COMMANDS:
            _save_prompt(session, input_fn, print_fn)
            return False
        if choice in available:
            session.restart(available[choice])
            if session.is_done():
                print_fn("No cards to study.")
                _save_prompt(session, input_fn, print_fn)
                return False
            return True
        print_fn("Invalid choice.")


def _save_prompt(session: StudySession, input_fn: InputFn, print_fn: PrintFn) -> None:
    """Offer to save the run before leaving it."""
    while True:
        choice = input_fn("Save this run? [y/n]: ").strip().lower()
        if choice == "n":
            return
        if choice != "y":
            print_fn("Invalid choice.")
            continue

        default = session.suggested_save_path()
        entered = input_fn(f"Save to [{default}]: ").strip()
        target = Path(entered) if entered else default
        try:
            saved = session.save(target)
        except OSError as exc:
            print_fn(f"Error: {exc}")
            continue
        print_fn(f"Run saved to {saved}.")
        return


def _new_deck_flow(input_fn: InputFn, print_fn: PrintFn) -> None:
    """Create a deck file from typed cards."""
    deck_path = input_fn("New deck file: ").strip()
    if not deck_path:
        return
    if Path(deck_path).exists():
        print_fn("File already exists. Use Edit deck instead.")
        return
    deck = Deck(path=deck_path)
    print_fn("Enter cards. Leave the front empty to finish.")
    _add_cards(deck, input_fn, print_fn)
    _save_deck(deck, print_fn)


def _edit_deck_flow(input_fn: InputFn, print_fn: PrintFn) -> None:
    """List, add and remove cards of an existing deck."""
    deck_path = input_fn("Deck file: ").strip()
    if not deck_path:
        return
    try:
        deck = load_deck(deck_path)
    except FILE_ERRORS as exc:
        print_fn(f"Error: {exc}")
        return

    dirty = False
    while True:
        print_fn(f"\n=== Deck: {deck.path} ({len(deck)} cards) ===")
        print_fn("l) List cards")
        print_fn("a) Add cards")
        print_fn("d) Delete card")
        print_fn("s) Save")
        print_fn("b) Back")
        choice = input_fn("Choose: ").strip().lower()

        if choice == "l":
            for card in deck.sorted_cards():
                print_fn(f"{card.id}) {card.front} | {card.back}")
        elif choice == "a":
            dirty = _add_cards(deck, input_fn, print_fn) > 0 or dirty
        elif choice == "d":
            card_id = parse_id(input_fn("Card id to delete: "))
            if card_id is None or card_id not in deck:
                print_fn("Unknown card id.")
                continue
            removed = deck.remove(card_id)
            print_fn(f"Deleted card {removed.id}.")
            dirty = True
        elif choice == "s":
            if _save_deck(deck, print_fn):
                dirty = False
        elif choice in MENU_BACK_COMMANDS:
            if dirty:
                confirm = input_fn("Discard unsaved changes? [y/N]: ").strip().lower()
                if confirm != "y":
                    continue
            return
        else:
            print_fn("Invalid choice.")


def _add_cards(deck: Deck, input_fn: InputFn, print_fn: PrintFn) -> int:
    """Prompt for cards until an empty front; return how many were added."""
    added = 0
    while True:
        front = input_fn("Front: ").strip()
        if not front:
            return added
        back = input_fn("Back: ").strip()
        card = deck.add(front, back)
        print_fn(f"Added card {card.id}.")
        added += 1


def _save_deck(deck: Deck, print_fn: PrintFn) -> bool:
    try:
        save_deck(deck.path, deck)
    except FILE_ERRORS as exc:
        print_fn(f"Error: {exc}")
        return False
    logger.info("Deck saved to {}", deck.path)
    print_fn(f"Deck saved to {deck.path} ({len(deck)} cards).")
    return True


def main_entry() -> None:
    """Console script entrypoint."""
    raise SystemExit(run())


if __name__ == "__main__":  # pragma: no cover
    main_entry()
