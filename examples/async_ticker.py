import asyncio
import logging

from pycadence import Runtime, Ticker, wait

logging.basicConfig(level=logging.INFO)


def heartbeat(name: str, period: float, beats: int):
    for beat in range(1, beats + 1):
        yield wait(period)
        print(f"{name} beat {beat}")


def flaky():
    yield wait(0.3)
    raise RuntimeError("flaky routine gave up")


async def main():
    runtime = Runtime()
    runtime.start(heartbeat("fast", 0.25, 8))
    runtime.start(heartbeat("slow", 0.5, 4))
    runtime.start(flaky)  # logged and dropped; the heartbeats keep going

    # $ export PYCADENCE_TICK_INTERVAL=0.01
    handle = await Ticker(runtime).from_env().start()

    while runtime.scheduler.active_count:
        await asyncio.sleep(0.1)

    await handle.shutdown()
    print(f"Done after {handle.ticks()} ticks")


if __name__ == "__main__":
    asyncio.run(main())
