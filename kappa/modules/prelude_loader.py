from __future__ import annotations
import logging
from typing import Protocol

from kappa.config import get_prelude_paths

logger = logging.getLogger(__name__)


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str) -> None: ...


def load_prelude(itp: _HasEvalPrelude) -> int:
    """Evaluate every file on KAPPA_PRELUDE_PATH; returns how many were loaded."""
    loaded = 0
    for path in get_prelude_paths():
        if not path.is_file():
            logger.warning("prelude file %s not found, skipping", path)
            continue
        itp.eval_prelude(path.read_text(encoding='utf-8'))
        logger.debug("loaded prelude %s", path)
        loaded += 1
    return loaded
