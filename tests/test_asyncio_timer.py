from __future__ import annotations

import asyncio

from trapviz.config import ChartingPolicy
from trapviz.scheduler import AsyncioTimer, RenderScheduler


def test_asyncio_timer_repeats_until_cancelled() -> None:
    async def runner() -> list[int]:
        fired: list[int] = []
        done = asyncio.Event()
        handle = None

        def callback() -> None:
            fired.append(1)
            if len(fired) == 3:
                assert handle is not None
                handle.cancel()
                done.set()

        handle = AsyncioTimer().schedule(5.0, callback)
        await asyncio.wait_for(done.wait(), timeout=2.0)
        await asyncio.sleep(0.05)
        return fired

    assert len(asyncio.run(runner())) == 3


def test_asyncio_timer_keeps_firing_after_callback_error() -> None:
    async def runner() -> int:
        calls: list[int] = []
        done = asyncio.Event()
        handle = None

        def callback() -> None:
            calls.append(1)
            if len(calls) <= 2:
                raise RuntimeError("render failed")
            assert handle is not None
            handle.cancel()
            done.set()

        handle = AsyncioTimer().schedule(2.0, callback)
        await asyncio.wait_for(done.wait(), timeout=2.0)
        await asyncio.sleep(0.02)
        return len(calls)

    assert asyncio.run(runner()) == 3


def test_scheduler_on_asyncio_retunes_and_pauses() -> None:
    policy = ChartingPolicy(
        charting_period_ms=6.0,
        update_period_min_ms=1.0,
        update_period_max_ms=50.0,
        initial_update_period_ms=10.0,
        tune_window_size=5,
    )

    async def runner() -> tuple[RenderScheduler, int, int]:
        renders: list[int] = []
        retuned = asyncio.Event()

        def render() -> None:
            renders.append(1)
            if len(renders) == 5:
                retuned.set()

        scheduler = RenderScheduler(render, policy, AsyncioTimer())
        scheduler.start()
        await asyncio.wait_for(retuned.wait(), timeout=2.0)
        scheduler.toggle()
        paused_at = len(renders)
        await asyncio.sleep(0.05)
        after_pause = len(renders)
        scheduler.stop()
        return scheduler, paused_at, after_pause

    scheduler, paused_at, after_pause = asyncio.run(runner())

    assert scheduler.retune_count >= 1
    assert paused_at == after_pause
    assert not scheduler.running
    assert not scheduler.scheduled
