"""Practice run state: card ids partitioned into study categories."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from .errors import IdNotFound
from .models import Deck, RunCategory


@dataclass
class PracticeRun:
    """In-progress study of one deck.

    Every tracked card id lives in exactly one of the four category lists.
    ``remaining`` is used as a queue whose last element is the current card.
    """

    deck_path: str = ""
    last_save_path: str = ""
    remaining: list[int] = field(default_factory=list)
    working: list[int] = field(default_factory=list)
    incorrect: list[int] = field(default_factory=list)
    memorized: list[int] = field(default_factory=list)
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    @classmethod
    def new_from_deck(
        cls, deck: Deck, *, rng: random.Random | None = None, deck_path: str | None = None
    ) -> PracticeRun:
        """Start a run with every card of ``deck`` remaining, shuffled."""
        run = cls(
            deck_path=deck.path if deck_path is None else deck_path,
            remaining=sorted(deck.ids()),
            rng=rng if rng is not None else random.Random(),
        )
        run.shuffle(RunCategory.REMAINING)
        return run

    def category(self, category: RunCategory) -> list[int]:
        """Return the live list backing one category."""
        lists = {
            RunCategory.REMAINING: self.remaining,
            RunCategory.WORKING: self.working,
            RunCategory.INCORRECT: self.incorrect,
            RunCategory.MEMORIZED: self.memorized,
        }
        return lists[category]

    def move(self, card_id: int, source: RunCategory, destination: RunCategory) -> None:
        """Move one id from ``source`` to the end of ``destination``."""
        ids = self.category(source)
        try:
            ids.remove(card_id)
        except ValueError:
            raise IdNotFound(card_id, source) from None
        self.category(destination).append(card_id)

    def move_last(self, source: RunCategory, destination: RunCategory) -> int:
        """Move the last id of ``source`` to ``destination`` and return it."""
        ids = self.category(source)
        if not ids:
            raise IdNotFound(None, source)
        card_id = ids[-1]
        self.move(card_id, source, destination)
        return card_id

    def move_category(self, source: RunCategory, destination: RunCategory) -> None:
        """Append every id of ``source`` to ``destination``, keeping their order."""
        if source is destination:
            return
        ids = self.category(source)
        self.category(destination).extend(ids)
        ids.clear()

    def shuffle(self, category: RunCategory) -> None:
        self.rng.shuffle(self.category(category))

    def shuffle_all(self) -> None:
        for category in RunCategory:
            self.shuffle(category)

    def skip(self) -> None:
        """Send the current card to the back of the queue."""
        if self.remaining:
            self.remaining.insert(0, self.remaining.pop())

    def reset(self) -> None:
        """Return every card to ``remaining`` and shuffle it for a new pass."""
        self.move_category(RunCategory.INCORRECT, RunCategory.REMAINING)
        self.move_category(RunCategory.WORKING, RunCategory.REMAINING)
        self.move_category(RunCategory.MEMORIZED, RunCategory.REMAINING)
        self.shuffle(RunCategory.REMAINING)

    def is_done(self) -> bool:
        return not self.remaining

    def current_card_id(self) -> int | None:
        """Return the id at the top of ``remaining``."""
        return self.remaining[-1] if self.remaining else None

    def find(self, card_id: int) -> RunCategory | None:
        """Return the category currently holding ``card_id``."""
        for category in RunCategory:
            if card_id in self.category(category):
                return category
        return None

    def counts(self) -> dict[RunCategory, int]:
        """Return the number of ids in each category."""
        return {category: len(self.category(category)) for category in RunCategory}

    def all_ids(self) -> set[int]:
        """Return every tracked id."""
        tracked: set[int] = set()
        for category in RunCategory:
            tracked.update(self.category(category))
        return tracked
