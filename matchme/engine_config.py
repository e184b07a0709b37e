"""Engine settings read from the environment.

Reads a ``.env`` file (if present) via python-dotenv, then the
``MATCHME_*`` environment variables.
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"", "0", "false", "no", "off"}


class EngineSettings(BaseModel):
    """Defaults applied when callers do not pass an explicit value."""

    strict_answers: bool = False
    quiz_dir: str = "quizzes"


def _read_flag(name: str) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if raw in _TRUTHY:
        return True
    if raw not in _FALSY:
        logger.warning("Unrecognised value %s=%r, treating as false", name, raw)
    return False


def load_engine_settings(env_file: str | None = None) -> EngineSettings:
    """Build :class:`EngineSettings` from the environment.

    Variables:
        MATCHME_STRICT_ANSWERS: ``1/true/yes/on`` to reject unknown question
            or option ids instead of skipping them.
        MATCHME_QUIZ_DIR: directory holding ``<quiz_id>.json`` files.

    Existing environment variables win over values in *env_file*.
    """
    load_dotenv(env_file)
    settings = EngineSettings(
        strict_answers=_read_flag("MATCHME_STRICT_ANSWERS"),
        quiz_dir=os.getenv("MATCHME_QUIZ_DIR", "") or "quizzes",
    )
    logger.debug("Engine settings: strict=%s quiz_dir=%s", settings.strict_answers, settings.quiz_dir)
    return settings
