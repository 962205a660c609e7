"""
Best-effort side effects.

SMS dispatch on registration, old image cleanup, provider credential
re-checks and provider password sync must never fail the operation that
triggers them. They are awaited through run_best_effort, which logs any
exception at WARNING level and returns None instead of raising.
"""

import logging
from typing import Awaitable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_best_effort(operation: str, awaitable: Awaitable[T]) -> Optional[T]:
    try:
        return await awaitable
    except Exception as exc:
        logger.warning(f"Best-effort operation '{operation}' failed: {exc}")
        return None
