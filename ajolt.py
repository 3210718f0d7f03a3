import asyncio
import typing


class AsyncJolt:
    """Yield to the event loop on the way into and out of a blocking hand-off.

    Wrap `asyncio.to_thread` calls in it so other tasks get a turn around
    each driver round trip.
    """

    async def __aenter__(self) -> None:
        await asyncio.sleep(0)

    async def __aexit__(self, *args: typing.Any, **kwargs: typing.Any) -> None:
        await asyncio.sleep(0)
