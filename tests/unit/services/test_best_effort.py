import logging

import pytest

from src.app.services.best_effort import run_best_effort


async def succeed():
    return 42


async def fail():
    raise RuntimeError("provider down")


@pytest.mark.asyncio
async def test_returns_value_on_success():
    assert await run_best_effort("compute", succeed()) == 42


@pytest.mark.asyncio
async def test_failure_is_logged_and_swallowed(caplog):
    with caplog.at_level(logging.WARNING):
        result = await run_best_effort("send SMS OTP", fail())

    assert result is None
    assert "send SMS OTP" in caplog.text
    assert "provider down" in caplog.text
