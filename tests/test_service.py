import random
from pathlib import Path

import pytest

from ize.deck_io import save_deck
from ize.errors import IdNotFound
from ize.models import Card, Deck, RunCategory
from ize.run_io import load_practice_run
from ize.service import CardSide, StudySession


def _deck_file(tmp_path: Path, size: int = 3) -> Path:
    path = tmp_path / "words.deck"
    save_deck(path, Deck(cards={card_id: Card(card_id, f"Q{card_id}", f"A{card_id}") for card_id in range(1, size + 1)}))
    return path


def test_start_builds_fresh_run(tmp_path: Path) -> None:
    deck_path = _deck_file(tmp_path)
    session = StudySession.start(deck_path, rng=random.Random(3))
    assert sorted(session.run.remaining) == [1, 2, 3]
    assert session.run.deck_path == str(deck_path.resolve())
    assert session.progress() == (0, 3)
    assert session.side is CardSide.FRONT


def test_flip_and_visible_text(tmp_path: Path) -> None:
    session = StudySession.start(_deck_file(tmp_path), rng=random.Random(3))
    card = session.current_card()
    assert card is not None
    assert session.visible_text() == card.front
    assert session.flip() is CardSide.BACK
    assert session.visible_text() == card.back
    assert session.flip() is CardSide.FRONT


def test_answer_moves_current_card_and_counts(tmp_path: Path) -> None:
    session = StudySession.start(_deck_file(tmp_path), rng=random.Random(3))
    first = session.run.current_card_id()
    session.flip()
    session.answer(RunCategory.MEMORIZED)
    assert session.run.memorized == [first]
    assert session.progress() == (1, 3)
    assert session.side is CardSide.FRONT


def test_answer_remaining_skips_without_counting(tmp_path: Path) -> None:
    session = StudySession.start(_deck_file(tmp_path), rng=random.Random(3))
    order = list(session.run.remaining)
    session.answer(RunCategory.REMAINING)
    assert session.run.remaining == [order[-1], *order[:-1]]
    assert session.progress() == (0, 3)


def test_answer_when_done_raises(tmp_path: Path) -> None:
    session = StudySession.start(_deck_file(tmp_path, size=1), rng=random.Random(3))
    session.answer(RunCategory.INCORRECT)
    assert session.is_done()
    assert session.current_card() is None
    assert session.visible_text() == ""
    with pytest.raises(IdNotFound):
        session.answer(RunCategory.WORKING)


def test_restart_single_pile_and_all(tmp_path: Path) -> None:
    session = StudySession.start(_deck_file(tmp_path), rng=random.Random(3))
    session.answer(RunCategory.INCORRECT)
    session.answer(RunCategory.WORKING)
    session.answer(RunCategory.MEMORIZED)
    assert [(pile.category, pile.count) for pile in session.pile_counts()] == [
        (RunCategory.INCORRECT, 1),
        (RunCategory.WORKING, 1),
        (RunCategory.MEMORIZED, 1),
    ]

    session.restart(RunCategory.INCORRECT)
    assert len(session.run.remaining) == 1
    assert session.progress() == (0, 1)

    session.restart()
    assert sorted(session.run.remaining) == [1, 2, 3]
    assert session.progress() == (0, 3)


def test_save_uses_suggested_and_last_path(tmp_path: Path) -> None:
    deck_path = _deck_file(tmp_path)
    session = StudySession.start(deck_path, rng=random.Random(3))
    with pytest.raises(ValueError):
        session.save()

    target = session.suggested_save_path()
    assert target == deck_path.resolve().with_suffix(".run")
    session.answer(RunCategory.WORKING)
    saved = session.save(target)
    assert session.run.last_save_path == str(saved.resolve())
    assert session.suggested_save_path() == saved.resolve()

    session.answer(RunCategory.MEMORIZED)
    session.save()
    run, _ = load_practice_run(target)
    assert len(run.working) == 1
    assert len(run.memorized) == 1
    assert len(run.remaining) == 1


def test_resume_continues_saved_run(tmp_path: Path) -> None:
    deck_path = _deck_file(tmp_path)
    session = StudySession.start(deck_path, rng=random.Random(3))
    session.answer(RunCategory.INCORRECT)
    run_path = session.save(tmp_path / "words.run")

    resumed = StudySession.resume(run_path, rng=random.Random(4))
    assert resumed.run.incorrect == session.run.incorrect
    assert sorted(resumed.run.remaining) == sorted(session.run.remaining)
    assert resumed.progress() == (0, 2)
