from __future__ import annotations

import random
import shutil
import sys
from collections.abc import Callable, Iterator
from pathlib import Path
from uuid import uuid4

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from ize.models import Card, Deck  # noqa: E402


def _tmp_path_fixture() -> Iterator[Path]:
    """Provide a per-test scratch directory under ``.tmp_pytest/`` in the project.

    Overrides pytest's builtin ``tmp_path`` so deck and run files written by
    tests stay inside the working tree.
    """
    base = ROOT / ".tmp_pytest"
    base.mkdir(parents=True, exist_ok=True)
    path = base / str(uuid4())
    path.mkdir(parents=True, exist_ok=False)
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)
        try:
            next(base.iterdir())
        except StopIteration:
            base.rmdir()
        except FileNotFoundError:
            pass


tmp_path = pytest.fixture(name="tmp_path")(_tmp_path_fixture)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def make_deck() -> Callable[[int], Deck]:
    def build(size: int) -> Deck:
        cards = {card_id: Card(id=card_id, front=f"Q{card_id}", back=f"A{card_id}") for card_id in range(1, size + 1)}
        return Deck(cards=cards)

    return build
