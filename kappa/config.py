from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


_DEFAULT_LOG_LEVEL = 'WARNING'


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    sep = _sep()
    return [Path(p.strip()) for p in raw.split(sep) if p.strip()]


def get_prelude_paths() -> List[Path]:
    """Source files evaluated by Interpreter(prelude='auto'), in order."""
    return paths_from_env('KAPPA_PRELUDE_PATH', [])


def get_log_level() -> int:
    raw = os.environ.get('KAPPA_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip()
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    # getLevelName returns a string for unknown names
    return level if isinstance(level, int) else logging.WARNING


def get_recursion_limit() -> Optional[int]:
    raw = os.environ.get('KAPPA_RECURSION_LIMIT')
    if not raw or not raw.strip().isdigit():
        return None
    return int(raw)


def configure_logging(level: Optional[int] = None) -> None:
    """Attach a basic handler for the `kappa` loggers (for applications, not the library)."""
    logging.basicConfig(format='%(asctime)s %(name)s %(levelname)s %(message)s')
    logging.getLogger('kappa').setLevel(level if level is not None else get_log_level())
