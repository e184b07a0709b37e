"""Read-only loader for quiz definitions stored as ``<quiz_id>.json`` files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
import re
import threading
from typing import Any

from pydantic import ValidationError

from matchme.engine_config import load_engine_settings
from matchme.quiz_models import QuizDefinition


logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def sanitize_quiz_id(quiz_id: str) -> str:
    """Reduce *quiz_id* to a plain file stem (no separators, no leading dots)."""
    cleaned = _UNSAFE_CHARS.sub("-", quiz_id.strip())
    return cleaned.strip(".-")


class QuizRepository:
    """Thread-safe, read-only access to quiz JSON files."""

    def __init__(self, quiz_dir: str | None = None) -> None:
        self._dir = Path(quiz_dir if quiz_dir is not None else load_engine_settings().quiz_dir)
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def load(self, quiz_id: str) -> QuizDefinition:
        """Load and validate quiz *quiz_id*.

        Raises:
            ValueError: empty id, unreadable JSON or missing required sections.
            FileNotFoundError: no file for *quiz_id*.
        """
        stem = sanitize_quiz_id(quiz_id)
        if not stem:
            raise ValueError("Quiz ID is required.")

        path = self._dir / f"{stem}.json"
        with self._lock:
            if not path.is_file():
                raise FileNotFoundError(f"Quiz not found: {stem}")
            try:
                with open(path, encoding="utf-8") as fh:
                    data = json.load(fh)
            except (OSError, json.JSONDecodeError) as exc:
                raise ValueError(f"Failed to read quiz {stem}: {exc}") from exc

        self._validate(data)
        try:
            quiz = QuizDefinition.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid quiz format in {stem}: {exc}") from exc

        logger.info("Loaded quiz %s (%d questions)", stem, len(quiz.questions))
        return quiz

    def list_quiz_ids(self) -> list[str]:
        """Sorted ids of every ``*.json`` file in the quiz directory."""
        if not self._dir.is_dir():
            return []
        return sorted(p.stem for p in self._dir.glob("*.json"))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    @staticmethod
    def _validate(data: Any) -> None:
        if not isinstance(data, dict):
            raise ValueError("Invalid quiz format.")
        meta = data.get("meta")
        if not isinstance(meta, dict):
            raise ValueError("Quiz meta missing.")
        if not isinstance(meta.get("title"), str):
            raise ValueError("Quiz title missing.")
        if not isinstance(meta.get("description"), str):
            raise ValueError("Quiz description missing.")
        questions = data.get("questions")
        if not isinstance(questions, list) or not questions:
            raise ValueError("Quiz questions missing.")
        if not isinstance(data.get("results"), (dict, list)):
            raise ValueError("Quiz results missing.")
