"""Unit tests for RequestCoalescer."""

from __future__ import annotations

import asyncio

import pytest

from gw2.webapi.runtime.rest.coalescer import RequestCoalescer


class TestRequestCoalescer:
    """Test sharing of in-flight work per key."""

    @pytest.mark.asyncio
    async def test_same_key_runs_factory_once(self):
        coalescer = RequestCoalescer()
        gate = asyncio.Event()
        calls = 0

        async def work() -> str:
            nonlocal calls
            calls += 1
            await gate.wait()
            return "done"

        tasks = [asyncio.create_task(coalescer.run("key", work)) for _ in range(3)]
        await asyncio.sleep(0)
        assert coalescer.is_inflight("key")

        gate.set()
        assert await asyncio.gather(*tasks) == ["done", "done", "done"]
        assert calls == 1
        assert len(coalescer) == 0

    @pytest.mark.asyncio
    async def test_different_keys_run_separately(self):
        coalescer = RequestCoalescer()

        async def work(value: int) -> int:
            await asyncio.sleep(0)
            return value

        results = await asyncio.gather(
            coalescer.run("a", lambda: work(1)),
            coalescer.run("b", lambda: work(2)),
        )
        assert results == [1, 2]

    @pytest.mark.asyncio
    async def test_finished_key_runs_again(self):
        coalescer = RequestCoalescer()
        calls = 0

        async def work() -> int:
            nonlocal calls
            calls += 1
            return calls

        assert await coalescer.run("key", work) == 1
        assert await coalescer.run("key", work) == 2

    @pytest.mark.asyncio
    async def test_exception_reaches_every_waiter(self):
        coalescer = RequestCoalescer()
        gate = asyncio.Event()

        async def work() -> None:
            await gate.wait()
            raise LookupError("gone")

        tasks = [asyncio.create_task(coalescer.run("key", work)) for _ in range(2)]
        await asyncio.sleep(0)
        gate.set()
        results = await asyncio.gather(*tasks, return_exceptions=True)

        assert all(isinstance(r, LookupError) for r in results)
        assert len(coalescer) == 0

    @pytest.mark.asyncio
    async def test_last_waiter_cancel_cancels_work(self):
        coalescer = RequestCoalescer()
        started = asyncio.Event()
        cancelled = asyncio.Event()

        async def work() -> None:
            started.set()
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                cancelled.set()
                raise

        caller = asyncio.create_task(coalescer.run("key", work))
        await started.wait()
        caller.cancel()

        with pytest.raises(asyncio.CancelledError):
            await caller
        await asyncio.wait_for(cancelled.wait(), timeout=1)
        assert len(coalescer) == 0
