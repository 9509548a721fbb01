"""Study session controller driving a practice run through one sitting."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from loguru import logger

from .deck_io import load_deck
from .models import Card, Deck, RunCategory
from .practice_run import PracticeRun
from .run_io import load_practice_run, save_practice_run

RUN_SUFFIX = ".run"


class CardSide(Enum):
    """Which face of the current card is showing."""

    FRONT = "Front"
    BACK = "Back"


@dataclass(frozen=True)
class PileCount:
    """Size of one finished pile, for the reshuffle menu."""

    category: RunCategory
    count: int


class StudySession:
    """Owns one run and its deck for the length of a study sitting."""

    def __init__(self, run: PracticeRun, deck: Deck) -> None:
        """Initialize session at the start of a pass."""
        self.run = run
        self.deck = deck
        self.side = CardSide.FRONT
        self.answered = 0
        self.pass_size = len(run.remaining)

    @classmethod
    def start(cls, deck_path: Path | str, *, rng: random.Random | None = None) -> StudySession:
        """Begin a fresh run over every card in a deck file."""
        deck = load_deck(deck_path)
        deck.path = str(Path(deck_path).resolve())
        run = PracticeRun.new_from_deck(deck, rng=rng)
        logger.info("Started run over {} cards from {}", len(deck), deck.path)
        return cls(run, deck)

    @classmethod
    def resume(cls, run_path: Path | str, *, rng: random.Random | None = None) -> StudySession:
        """Continue a saved run."""
        run, deck = load_practice_run(run_path)
        if rng is not None:
            run.rng = rng
        logger.info("Resumed run {} with {} cards remaining", run.last_save_path, len(run.remaining))
        return cls(run, deck)

    def is_done(self) -> bool:
        return self.run.is_done()

    def current_card(self) -> Card | None:
        """Return the card being studied, or None when the pass is finished."""
        card_id = self.run.current_card_id()
        if card_id is None:
            return None
        return self.deck[card_id]

    def flip(self) -> CardSide:
        """Turn the current card over."""
        self.side = CardSide.BACK if self.side is CardSide.FRONT else CardSide.FRONT
        return self.side

    def visible_text(self) -> str:
        """Return the text on the showing side of the current card."""
        card = self.current_card()
        if card is None:
            return ""
        return card.front if self.side is CardSide.FRONT else card.back

    def answer(self, category: RunCategory) -> None:
        """Grade the current card.

        ``RunCategory.REMAINING`` defers the card to the back of the queue
        instead of grading it.
        """
        if category is RunCategory.REMAINING:
            self.run.skip()
        else:
            self.run.move_last(RunCategory.REMAINING, category)
            self.answered += 1
        self.side = CardSide.FRONT

    def progress(self) -> tuple[int, int]:
        """Return (answered, total) for the current pass."""
        return (self.answered, max(1, self.pass_size))

    def pile_counts(self) -> list[PileCount]:
        """Return sizes of the graded piles."""
        return [
            PileCount(category=category, count=len(self.run.category(category)))
            for category in (RunCategory.INCORRECT, RunCategory.WORKING, RunCategory.MEMORIZED)
        ]

    def restart(self, category: RunCategory | None = None) -> None:
        """Start a new pass over every card, or over one graded pile."""
        if category is None or category is RunCategory.REMAINING:
            self.run.reset()
        else:
            self.run.move_category(category, RunCategory.REMAINING)
            self.run.shuffle(RunCategory.REMAINING)
        self.answered = 0
        self.pass_size = len(self.run.remaining)
        self.side = CardSide.FRONT

    def suggested_save_path(self) -> Path:
        """Return where the run was last saved, or a path beside its deck."""
        if self.run.last_save_path:
            return Path(self.run.last_save_path)
        deck_path = Path(self.run.deck_path or self.deck.path or "deck")
        return deck_path.with_suffix(RUN_SUFFIX)

    def save(self, path: Path | str | None = None) -> Path:
        """Save the run and remember where it went."""
        if path is None:
            if not self.run.last_save_path:
                raise ValueError("No save path given and run has never been saved.")
            path = self.run.last_save_path
        target = Path(path)
        save_practice_run(target, self.run)
        self.run.last_save_path = str(target.resolve())
        return target
