"""
Traffic light driven by a plain frame loop.

Shows delays, nested routines and cancellation by handle.
"""

import logging
import time

from pycadence import Runtime, wait

logging.basicConfig(level=logging.INFO)

FRAME = 1.0 / 30.0


def blink(color: str, times: int):
    for _ in range(times):
        print(f"  {color} on")
        yield wait(0.2)
        print(f"  {color} off")
        yield wait(0.2)


def cycle():
    while True:
        print("GREEN")
        yield wait(1.0)
        print("YELLOW")
        yield blink("yellow", 2)
        print("RED")
        yield wait(1.0)


def frame_counter():
    frame_counter.frames += 1


frame_counter.frames = 0


def main():
    runtime = Runtime()
    runtime.register(frame_counter)
    handle = runtime.start(cycle)

    last = time.monotonic()
    deadline = last + 5.0
    while time.monotonic() < deadline:
        time.sleep(FRAME)
        now = time.monotonic()
        runtime.tick(now - last)
        last = now

    runtime.cancel(handle)
    print(f"Stopped after {frame_counter.frames} frames")


if __name__ == "__main__":
    main()
