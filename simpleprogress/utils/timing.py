# simpleprogress/utils/timing.py
"""
Timed phases that log their outcome alongside the duration
"""
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from .logging import get_logger


def _ms_since(t0: float) -> float:
    return round((time.perf_counter() - t0) * 1000, 3)


@contextmanager
def log_phase(event_base: str, **fields: Any) -> Iterator[Dict[str, Any]]:
    """
    Log a "<event_base>_start" / "<event_base>_complete" pair around a block.

    The block receives a dict; whatever it stores there is added to the
    complete event together with took_ms. If the block raises, a
    "<event_base>_failed" event is logged instead and the error propagates.

    Example:
        with log_phase("demo.bar", total=bar.total) as outcome:
            ...
            outcome["current"] = bar.current
    """
    log = get_logger("simpleprogress.phase").bind(**fields)
    log.info(f"{event_base}_start")
    outcome: Dict[str, Any] = {}
    t0 = time.perf_counter()
    try:
        yield outcome
    except Exception as e:
        log.error(f"{event_base}_failed", took_ms=_ms_since(t0), error=repr(e), **outcome)
        raise
    log.info(f"{event_base}_complete", took_ms=_ms_since(t0), **outcome)
