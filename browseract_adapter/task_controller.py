# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Task Lifecycle Controller

Submits one run request, polls the created task until it reaches a
terminal status or the poll budget is spent, and stops the task on
timeout.

    Submitting -> Polling -> Completed
                          -> TimedOut -> Stopping -> Completed
"""

import asyncio
import math
from typing import Any, Awaitable, Callable, Optional

from browseract_adapter.api_client import TaskApiClient
from browseract_adapter.core.config import Config, get_config
from browseract_adapter.core.errors import BrowserActError
from browseract_adapter.core.logging import get_service_logger, log_event
from browseract_adapter.models import TERMINAL_STATUSES, RunMode, RunRequest, TaskResult, TaskState

logger = get_service_logger("task_controller")

SleepFunc = Callable[[float], Awaitable[Any]]


def coerce_timeout(timeout_seconds: Any, default: int) -> float:
    """Non-numeric, zero or negative timeouts fall back to the default."""
    try:
        value = float(timeout_seconds)
    except (TypeError, ValueError):
        return default
    if math.isnan(value) or value <= 0:
        return default
    return value


def compute_max_attempts(timeout_seconds: float, poll_delay_ms: int, hard_cap: int) -> int:
    """
    Number of status polls that fit in the timeout.

    Example:
        >>> compute_max_attempts(10, 5000, 16560)
        2
        >>> compute_max_attempts(float("inf"), 5000, 16560)
        16560
    """
    polls = timeout_seconds * 1000 / poll_delay_ms
    if not math.isfinite(polls):
        return hard_cap
    return min(math.ceil(polls), hard_cap)


def is_terminal(detail: Any) -> bool:
    return isinstance(detail, dict) and detail.get("status") in TERMINAL_STATUSES


class TaskController:
    """
    Drives a single task from submission to a final record.

    One controller instance can run many requests sequentially; it keeps
    no state between runs.
    """

    def __init__(
        self,
        api: TaskApiClient,
        config: Optional[Config] = None,
        sleep: SleepFunc = asyncio.sleep
    ):
        """
        Initialize the controller.

        Args:
            api: Task API client
            config: Adapter configuration (poll delay, hard cap, default timeout)
            sleep: Awaitable sleep used between polls
        """
        self.api = api
        self.config = config or get_config()
        self._sleep = sleep

    async def run(self, request: RunRequest, timeout_seconds: Any = None) -> TaskResult:
        """
        Submit a task and wait for it to finish.

        Args:
            request: Validated run request
            timeout_seconds: Time budget for polling

        Returns:
            TaskResult with the final task detail, or without one when the
            service returned no task id

        Raises:
            TransportError: If submission or a poll request fails
        """
        mode = request.mode
        timeout = coerce_timeout(timeout_seconds, self.config.default_timeout_seconds)
        max_attempts = compute_max_attempts(timeout, self.config.poll_delay_ms, self.config.poll_hard_cap)

        # Submitting
        response = await self.api.run_task(mode, request.body())
        raw_id = response.get("id") if isinstance(response, dict) else None
        if not raw_id:
            logger.warning(f"{mode.value} run-task returned no task id")
            return TaskResult(task_id=None, detail=None, state=TaskState.NOT_STARTED)

        task_id = str(raw_id)
        log_event(logger, "task submitted", task_id=task_id, mode=mode.value, max_attempts=max_attempts)

        # Polling
        attempts = 0
        for attempts in range(1, max_attempts + 1):
            await self._sleep(self.config.poll_delay_seconds)

            detail = await self.api.get_task(mode, task_id)
            status = detail.get("status") if isinstance(detail, dict) else None
            logger.debug(f"Task {task_id} poll {attempts}/{max_attempts}: {status}")

            if is_terminal(detail):
                log_event(logger, "task completed", task_id=task_id, status=status, attempts=attempts)
                return TaskResult(
                    task_id=task_id,
                    detail=detail,
                    state=TaskState.COMPLETED,
                    attempts=attempts
                )

        # TimedOut -> Stopping
        log_event(logger, "task timed out", level="WARNING", task_id=task_id, timeout_seconds=timeout)
        await self._stop(mode, task_id)

        detail = await self.api.get_task(mode, task_id)
        return TaskResult(
            task_id=task_id,
            detail=detail if isinstance(detail, dict) else None,
            state=TaskState.TIMED_OUT,
            attempts=attempts + 1
        )

    async def _stop(self, mode: RunMode, task_id: str) -> None:
        """Best-effort stop; the final fetch happens regardless."""
        try:
            await self.api.stop_task(mode, task_id)
            log_event(logger, "task stopped", task_id=task_id)
        except BrowserActError as e:
            logger.warning(f"Failed to stop task {task_id}: {e}")
