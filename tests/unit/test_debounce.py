"""Tests for core/debounce.py."""

import asyncio

import pytest

from core.debounce import Debouncer


class TestDebouncer:
    @pytest.mark.asyncio
    async def test_last_value_wins(self):
        received = []
        debounce = Debouncer(0.02, received.append)
        debounce("a")
        debounce("b")
        debounce("c")
        await debounce.wait()
        assert received == ["c"]

    @pytest.mark.asyncio
    async def test_fires_only_after_quiet_window(self):
        received = []
        debounce = Debouncer(0.05, received.append)
        debounce("a")
        await asyncio.sleep(0.01)
        assert received == []
        assert debounce.pending
        await debounce.wait()
        assert received == ["a"]
        assert not debounce.pending

    @pytest.mark.asyncio
    async def test_calls_inside_window_restart_it(self):
        received = []
        debounce = Debouncer(0.04, received.append)
        debounce("a")
        await asyncio.sleep(0.02)
        debounce("b")
        await asyncio.sleep(0.03)
        assert received == []
        await debounce.wait()
        assert received == ["b"]

    @pytest.mark.asyncio
    async def test_cancel_drops_pending_value(self):
        received = []
        debounce = Debouncer(0.01, received.append)
        debounce("a")
        debounce.cancel()
        await asyncio.sleep(0.03)
        assert received == []
        assert not debounce.pending

    @pytest.mark.asyncio
    async def test_wait_without_pending_returns(self):
        debounce = Debouncer(1.0, lambda v: None)
        await asyncio.wait_for(debounce.wait(), timeout=0.1)
