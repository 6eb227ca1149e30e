"""Tests for the request pacer."""

import pytest

from anki_deck.utils.pacing import PacingPolicy, RequestPacer


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.mark.asyncio
async def test_fixed_delay_sleeps_every_time() -> None:
    clock = FakeClock()
    pacer = RequestPacer(0.1, sleep=clock.sleep, clock=clock)

    await pacer.wait()
    await pacer.wait()

    assert clock.sleeps == [0.1, 0.1]


@pytest.mark.asyncio
async def test_zero_delay_disables_pacing() -> None:
    clock = FakeClock()
    pacer = RequestPacer(0, sleep=clock.sleep, clock=clock)

    await pacer.wait()

    assert not pacer.enabled
    assert clock.sleeps == []


@pytest.mark.asyncio
async def test_min_interval_only_waits_for_the_remainder() -> None:
    clock = FakeClock()
    pacer = RequestPacer(
        0.5, policy=PacingPolicy.MIN_INTERVAL, sleep=clock.sleep, clock=clock
    )

    await pacer.wait()
    clock.now += 0.2
    await pacer.wait()
    clock.now += 1.0
    await pacer.wait()

    assert clock.sleeps == [pytest.approx(0.3)]


def test_policy_accepts_string_value() -> None:
    pacer = RequestPacer(0.1, policy="min_interval")

    assert pacer.policy is PacingPolicy.MIN_INTERVAL
