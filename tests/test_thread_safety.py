"""Tests for thread safety of Injector."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

from picowire.lock_mode import LockMode
from picowire.registry import Registry
from picowire.types import Resolver


class SlowService:
    instances = 0

    def __init__(self) -> None:
        time.sleep(0.01)
        SlowService.instances += 1


class DependsOnSlow:
    def __init__(self, slow: SlowService) -> None:
        self.slow = slow


class TestConcurrentResolution:
    def test_concurrent_first_resolution_builds_once(self) -> None:
        SlowService.instances = 0
        injector = Registry().register(SlowService).build(lock_mode=LockMode.THREAD)
        barrier = threading.Barrier(10)
        results: list[SlowService] = []
        errors: list[Exception] = []

        def resolve_service() -> None:
            try:
                barrier.wait()
                results.append(injector.resolve(SlowService))
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=resolve_service) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert len(results) == 10
        assert all(r is results[0] for r in results)
        assert SlowService.instances == 1

    def test_concurrent_resolution_of_dependents_shares_dependency(self) -> None:
        SlowService.instances = 0
        injector = Registry().register(SlowService).register(DependsOnSlow).build()

        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = [
                executor.submit(injector.resolve, DependsOnSlow if i % 2 else SlowService)
                for i in range(32)
            ]
            results = [future.result() for future in futures]

        slow = injector.resolve(SlowService)
        assert SlowService.instances == 1
        assert all(
            (r.slow if isinstance(r, DependsOnSlow) else r) is slow for r in results
        )

    def test_concurrent_factory_runs_once(self) -> None:
        calls = 0

        def build(_: Resolver) -> object:
            nonlocal calls
            time.sleep(0.01)
            calls += 1
            return object()

        injector = Registry().register_factory("token", build).build()

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda _: injector.resolve("token"), range(16)))

        assert calls == 1
        assert all(r is results[0] for r in results)
