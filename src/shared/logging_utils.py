"""
Structured logging on the ``portfolio`` logger.

Messages are short event names (``featured:resolved``, ``record:invalid``);
everything else goes in ``custom_dimensions`` so Application Insights keeps
it as queryable properties. Dimensions whose value is None are dropped.
"""
import logging
from contextlib import contextmanager
from time import perf_counter
from typing import Any, Dict, Iterator, Optional


_LOGGER = logging.getLogger("portfolio")


def dimensions(request_id: Optional[str], **dims: Any) -> Dict[str, Any]:
    out: Dict[str, Any] = {"requestId": request_id} if request_id else {}
    out.update((k, v) for k, v in dims.items() if v is not None)
    return out


def log(level: int, request_id: Optional[str], event: str, **dims: Any) -> None:
    _LOGGER.log(level, event, extra={"custom_dimensions": dimensions(request_id, **dims)})


def info(request_id: Optional[str], event: str, **dims: Any) -> None:
    log(logging.INFO, request_id, event, **dims)


def warning(request_id: Optional[str], event: str, **dims: Any) -> None:
    log(logging.WARNING, request_id, event, **dims)


def error(request_id: Optional[str], event: str, **dims: Any) -> None:
    log(logging.ERROR, request_id, event, **dims)


@contextmanager
def timed(request_id: Optional[str], event: str, **dims: Any) -> Iterator[Dict[str, Any]]:
    """Log ``event`` with ``durationMs`` once the block finishes.

    The yielded dict takes dimensions only known inside the block. If the block
    raises, the event is logged at ERROR with the exception type and the
    exception propagates.
    """
    extra: Dict[str, Any] = {}
    start = perf_counter()
    try:
        yield extra
    except Exception as exc:
        error(request_id, event, durationMs=_elapsed_ms(start), error=type(exc).__name__, **{**dims, **extra})
        raise
    info(request_id, event, durationMs=_elapsed_ms(start), **{**dims, **extra})


def _elapsed_ms(start: float) -> int:
    return int((perf_counter() - start) * 1000)
