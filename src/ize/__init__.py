"""ize: flashcard decks with resumable practice runs."""

from __future__ import annotations

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from loguru import logger

from .deck_io import load_deck, save_deck
from .errors import FormatError, IdNotFound
from .models import Card, Deck, RunCategory
from .practice_run import PracticeRun
from .run_io import load_practice_run, save_practice_run

__all__ = [
    "Card",
    "Deck",
    "FormatError",
    "IdNotFound",
    "PracticeRun",
    "RunCategory",
    "__version__",
    "load_deck",
    "load_practice_run",
    "save_deck",
    "save_practice_run",
]

# Silent when used as a library; configure_logging turns it on.
logger.disable("ize")


def _version_from_pyproject() -> str | None:
    """Best-effort version lookup from a source checkout's pyproject.toml."""
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    if not pyproject.exists():
        return None
    with pyproject.open("rb") as handle:
        project = tomllib.load(handle).get("project", {})
    if project.get("name") != "ize":
        return None
    return project.get("version")


_project_version = _version_from_pyproject()
if _project_version is not None:
    __version__ = _project_version
else:
    try:
        __version__ = version("ize")
    except PackageNotFoundError:
        __version__ = "0+unknown"
