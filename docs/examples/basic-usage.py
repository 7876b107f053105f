#!/usr/bin/env python3
"""
Basic Perfscope Usage Examples

This script demonstrates the monitor's render timing, memory snapshots,
async operation timing, frame-rate sampling and summaries.
"""

import asyncio
import json
import random

from perfscope_core import LifecycleEvent, PerformanceMonitor, PerfscopeSettings
from perfscope_core.utils import configure_logging


def example_1_render_timing(monitor: PerformanceMonitor):
    """Example 1: Time renders with explicit tokens and a context manager"""
    print("\n=== Example 1: Render Timing ===\n")

    for _ in range(5):
        token = monitor.start_render("FeedList")
        sum(i * i for i in range(random.randint(10_000, 400_000)))
        monitor.end_render(token)

    with monitor.track_render("Header"):
        sum(range(1000))


def example_2_component_lifecycle(monitor: PerformanceMonitor):
    """Example 2: Component accessor with mount/unmount snapshots"""
    print("\n=== Example 2: Component Lifecycle ===\n")

    perf = monitor.for_component("SettingsScreen")
    perf.log_lifecycle(LifecycleEvent.MOUNT, {"tab": "privacy"})

    with perf.render():
        buffer = [bytearray(1024) for _ in range(5000)]

    perf.log_lifecycle(LifecycleEvent.UNMOUNT)
    del buffer


async def example_3_async_operations(monitor: PerformanceMonitor):
    """Example 3: Measure async work; failures propagate unchanged"""
    print("\n=== Example 3: Async Operations ===\n")

    @monitor.measured("fetch_profile")
    async def fetch_profile(user_id: int) -> dict:
        await asyncio.sleep(0.05)
        return {"id": user_id, "name": "demo"}

    profile = await fetch_profile(7)
    print(f"Profile: {profile}")

    async def flaky_upload():
        await asyncio.sleep(0.01)
        raise ConnectionError("upload interrupted")

    try:
        await monitor.measure_async("upload_avatar", flaky_upload)
    except ConnectionError as e:
        print(f"Caller still sees the original error: {e!r}")


async def example_4_fps_sampling(monitor: PerformanceMonitor):
    """Example 4: Sample frame rate for a few seconds, then stop"""
    print("\n=== Example 4: Frame Rate ===\n")

    task = monitor.start_fps_logging()
    if task is None:
        print("Monitoring disabled; nothing sampled")
        return

    await asyncio.sleep(2.5)
    monitor.stop_fps_logging()
    print(f"Last measured FPS: {monitor.last_fps}")


async def main():
    configure_logging(level="INFO", format="console")

    settings = PerfscopeSettings(environment="development")
    monitor = PerformanceMonitor.from_settings(settings)

    example_1_render_timing(monitor)
    example_2_component_lifecycle(monitor)
    await example_3_async_operations(monitor)
    await example_4_fps_sampling(monitor)

    print("\n=== Summary ===\n")
    summary = monitor.get_summary()
    if summary is not None:
        print(json.dumps(summary.to_dict(), indent=2, default=str))

    monitor.clear()


if __name__ == "__main__":
    asyncio.run(main())
