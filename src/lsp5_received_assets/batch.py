from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from . import constants as const
from .errors import BatchCallError, CallRevertedError
from .store import Checkpointable

logger = logging.getLogger(__name__)


def _revert_reason(error: Exception) -> str | bytes:
    """
    Pick the reason reported for a failed sub-call.

    The sub-call's own payload is passed through verbatim; without one the generic
    batch message is used.
    """
    if isinstance(error, CallRevertedError):
        if error.reason is not None and error.reason not in ("", b""):
            return error.reason
        return const.BATCH_GENERIC_REVERT_REASON
    text = str(error)
    return text if text else const.BATCH_GENERIC_REVERT_REASON


def relay_batch(
    calls: Sequence[Callable[[], Any]],
    *,
    host: object | None = None,
) -> list[Any]:
    """
    Execute `calls` against the host in order, all-or-nothing.

    Each call is a zero-argument callable returning its raw result. If any call raises,
    the remaining calls are not executed, the host is rolled back to its state before the
    batch (when it supports `checkpoint()`/`rollback()`), and `BatchCallError` is raised
    with the failing call's reason and position.

    Returns:
        The results of every call, in order.
    """
    token = host.checkpoint() if isinstance(host, Checkpointable) else None

    results: list[Any] = []
    for i, call in enumerate(calls):
        try:
            results.append(call())
        except Exception as e:
            if token is not None:
                host.rollback(token)  # type: ignore[union-attr]
            reason = _revert_reason(e)
            logger.debug("Batch aborted at call %d: %r", i, reason)
            raise BatchCallError(reason, index=i) from e
    return results
