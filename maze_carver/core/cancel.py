import asyncio

from maze_carver.core.errors import AbortedError


class CancelSignal:
    """
    External stop request shared between a running animation and its owner.
    Once aborted it stays aborted.
    """

    def __init__(self):
        self._event = asyncio.Event()

    @property
    def aborted(self) -> bool:
        return self._event.is_set()

    def abort(self):
        self._event.set()

    async def wait(self):
        await self._event.wait()


async def timeout_with_cancel(duration_ms: float, signal: CancelSignal):
    """
    Sleeps for 'duration_ms' milliseconds unless 'signal' fires first,
    in which case AbortedError is raised immediately.
    Both the timer and the signal watcher are released on every outcome.
    """
    if signal.aborted:
        raise AbortedError("aborted")

    timer = asyncio.ensure_future(asyncio.sleep(max(duration_ms, 0) / 1000))
    watcher = asyncio.ensure_future(signal.wait())
    try:
        done, _ = await asyncio.wait({timer, watcher}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        timer.cancel()
        watcher.cancel()

    # An abort landing in the same loop iteration as the timer still wins
    if watcher in done or signal.aborted:
        raise AbortedError("aborted")
