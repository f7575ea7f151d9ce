"""Blocking wrappers around the coroutine operations."""

from __future__ import annotations

import asyncio
import concurrent.futures
from collections.abc import Callable, Coroutine
from typing import TypeVar

from .errors import OperationInterruptedError, PulsarAdminError, TransportFailureError

T = TypeVar("T")


def run_inline(coro: Coroutine[None, None, T]) -> T:
    """Run a coroutine that completes without ever yielding to an event loop.

    ``PackagesClient`` builds its operations from the same coroutines as the
    async client, but over a transport whose ``send`` blocks and never
    suspends. Sending ``None`` once then runs the whole operation, including
    the async generators that carry download chunks.
    """
    try:
        coro.send(None)
    except StopIteration as ex:
        return ex.value  # type: ignore [no-any-return]
    else:
        raise RuntimeError(f"coroutine {coro!r} suspended on a blocking transport")
    finally:
        coro.close()


def _run_in_new_loop(operation: Callable[[], Coroutine[None, None, T]]) -> T:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(operation())
    # asyncio.run refuses to nest, so the operation gets its own loop on a
    # worker thread while this thread waits.
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
        return executor.submit(lambda: asyncio.run(operation())).result()


def _unwrap(run: Callable[[], T]) -> T:
    try:
        return run()
    except PulsarAdminError:
        raise
    except asyncio.CancelledError as exc:
        raise OperationInterruptedError() from exc
    except Exception as exc:
        raise TransportFailureError(f"{type(exc).__name__}: {exc}", exc) from exc


def run_sync(operation: Callable[[], Coroutine[None, None, T]]) -> T:
    """Drive a blocking-transport operation to completion on this thread."""
    return _unwrap(lambda: run_inline(operation()))


def blocking(operation: Callable[[], Coroutine[None, None, T]]) -> T:
    """Start ``operation`` and wait for its outcome.

    ``operation`` is a factory returning a coroutine, typically a bound
    ``AsyncPackagesClient`` method wrapped in a lambda. With no event loop
    running in the calling thread, the coroutine runs on a fresh loop via
    ``asyncio.run``. Inside a running loop, it runs on a loop owned by a
    worker thread and the caller blocks until it finishes.

    Admin errors are re-raised unchanged. Cancellation surfaces as
    ``OperationInterruptedError``; anything else is wrapped in a
    ``TransportFailureError`` chained to the original exception.
    """
    return _unwrap(lambda: _run_in_new_loop(operation))


__all__ = ["blocking", "run_inline", "run_sync"]
