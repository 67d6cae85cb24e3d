# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Unit tests for TaskController

Tests submission, the poll budget, early exit on terminal status and the
stop-then-fetch path on timeout.
"""

import pytest
from unittest.mock import call

from browseract_adapter.core.config import Config
from browseract_adapter.core.errors import TransportError
from browseract_adapter.models import RunMode, TaskState
from browseract_adapter.payload_builder import build
from browseract_adapter.task_controller import (
    TaskController,
    coerce_timeout,
    compute_max_attempts,
)


@pytest.fixture
def agent_request():
    return build("agent", {"task": "Check the weather", "agentId": "agent-7"})


@pytest.fixture
def controller(mock_api, config, fake_sleep):
    return TaskController(mock_api, config=config, sleep=fake_sleep)


class TestPollBudget:
    """Test max attempt computation"""

    @pytest.mark.parametrize("timeout,expected", [
        (10, 2),
        (7, 2),
        (5, 1),
        (1, 1),
        (3600, 720),
        (82800, 16560),
        (86400, 16560),
        (10 ** 9, 16560),
        (1e306, 16560),
        (float("inf"), 16560),
    ])
    def test_attempts_capped(self, timeout, expected):
        assert compute_max_attempts(timeout, 5000, 16560) == expected

    @pytest.mark.parametrize("raw,expected", [
        (None, 3600),
        ("", 3600),
        ("abc", 3600),
        (0, 3600),
        (-5, 3600),
        (float("nan"), 3600),
        ("20", 20.0),
        (12.5, 12.5),
        ("Infinity", float("inf")),
    ])
    def test_timeout_coercion(self, raw, expected):
        assert coerce_timeout(raw, 3600) == expected


class TestRun:
    """Test run method"""

    @pytest.mark.asyncio
    async def test_stops_polling_at_first_terminal_status(self, controller, mock_api, fake_sleep, agent_request):
        """timeout=10 gives two attempts; running then finished ends the loop"""
        finished = {"id": "task-1", "status": "finished", "output": "sunny"}
        mock_api.run_task.return_value = {"id": "task-1"}
        mock_api.get_task.side_effect = [{"id": "task-1", "status": "running"}, finished]

        result = await controller.run(agent_request, 10)

        assert result.state == TaskState.COMPLETED
        assert result.detail == finished
        assert result.attempts == 2
        assert result.to_record() == finished
        mock_api.run_task.assert_awaited_once_with(
            RunMode.AGENT, {"task": "Check the weather", "agent_id": "agent-7"}
        )
        mock_api.stop_task.assert_not_awaited()
        assert fake_sleep.await_args_list == [call(5.0), call(5.0)]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("timeout", ["Infinity", float("inf"), 1e306])
    async def test_unbounded_timeout_polls_under_hard_cap(self, controller, mock_api, agent_request, timeout):
        mock_api.run_task.return_value = {"id": "task-1"}
        mock_api.get_task.return_value = {"id": "task-1", "status": "finished"}

        result = await controller.run(agent_request, timeout)

        assert result.state == TaskState.COMPLETED
        assert result.attempts == 1
        mock_api.stop_task.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status",["finished", "canceled", "paused", "failed"])
    async def test_every_terminal_status_ends_loop(self, controller, mock_api, agent_request, status):
        mock_api.run_task.return_value = {"id": "task-1"}
        mock_api.get_task.return_value = {"status": status}

        result = await controller.run(agent_request, 60)

        assert result.attempts == 1
        assert result.status == status
        mock_api.get_task.assert_awaited_once_with(RunMode.AGENT, "task-1")

    @pytest.mark.asyncio
    async def test_timeout_stops_then_fetches_once(self, controller, mock_api, fake_sleep, agent_request):
        """Exhausted budget should issue exactly one stop and one final fetch"""
        final = {"id": "task-9", "status": "canceled"}
        mock_api.run_task.return_value = {"id": "task-9"}
        mock_api.get_task.side_effect = [
            {"status": "running"},
            {"status": "created"},
            final,
        ]

        result = await controller.run(agent_request, 10)

        assert result.state == TaskState.TIMED_OUT
        assert result.detail == final
        mock_api.stop_task.assert_awaited_once_with(RunMode.AGENT, "task-9")
        assert mock_api.get_task.await_count == 3
        assert fake_sleep.await_count == 2

    @pytest.mark.asyncio
    async def test_final_fetch_used_regardless_of_status(self, controller, mock_api, agent_request):
        still_running = {"status": "running", "steps": 4}
        mock_api.run_task.return_value = {"id": "task-2"}
        mock_api.get_task.return_value = still_running

        result = await controller.run(agent_request, 5)

        assert result.state == TaskState.TIMED_OUT
        assert result.to_record() == still_running

    @pytest.mark.asyncio
    async def test_failed_stop_does_not_block_final_fetch(self, controller, mock_api, agent_request):
        mock_api.run_task.return_value = {"id": "task-3"}
        mock_api.get_task.side_effect = [{"status": "running"}, {"status": "stopped"}]
        mock_api.stop_task.side_effect = TransportError("boom", status_code=500)

        result = await controller.run(agent_request, 5)

        assert result.detail == {"status": "stopped"}
        mock_api.stop_task.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_task_id_yields_error_record(self, controller, mock_api, fake_sleep, agent_request):
        mock_api.run_task.return_value = {"message": "accepted"}

        result = await controller.run(agent_request, 10)

        assert result.state == TaskState.NOT_STARTED
        assert result.detail is None
        assert result.to_record() == {"error": "Error", "taskId": None}
        mock_api.get_task.assert_not_awaited()
        fake_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_numeric_task_id_is_stringified(self, controller, mock_api, agent_request):
        mock_api.run_task.return_value = {"id": 42}
        mock_api.get_task.return_value = {"status": "finished"}

        result = await controller.run(agent_request, 10)

        assert result.task_id == "42"
        mock_api.get_task.assert_awaited_once_with(RunMode.AGENT, "42")

    @pytest.mark.asyncio
    async def test_poll_failure_propagates(self, controller, mock_api, agent_request):
        """A failed poll request aborts the run; it is not retried"""
        mock_api.run_task.return_value = {"id": "task-4"}
        mock_api.get_task.side_effect = TransportError("gateway", status_code=502)

        with pytest.raises(TransportError):
            await controller.run(agent_request, 60)

        assert mock_api.get_task.await_count == 1
        mock_api.stop_task.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_submission_failure_propagates(self, controller, mock_api, agent_request):
        mock_api.run_task.side_effect = TransportError("unauthorized", status_code=401)

        with pytest.raises(TransportError):
            await controller.run(agent_request, 60)

        mock_api.get_task.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_workflow_request_uses_workflow_routes(self, controller, mock_api):
        request = build("workflow", {
            "workflowId": "wf-1",
            "workflowConfig": {
                "value": {"input-q": "x"},
                "schema": [{"id": "input-q", "displayName": "q"}],
            },
        })
        mock_api.run_task.return_value = {"id": "wt-1"}
        mock_api.get_task.return_value = {"status": "finished"}

        await controller.run(request, 10)

        mock_api.run_task.assert_awaited_once_with(
            RunMode.WORKFLOW,
            {"workflow_id": "wf-1", "input_parameters": [{"name": "q", "value": "x"}], "credentials": []},
        )
        mock_api.get_task.assert_awaited_once_with(RunMode.WORKFLOW, "wt-1")

    @pytest.mark.asyncio
    async def test_custom_poll_delay(self, mock_api, fake_sleep, agent_request):
        controller = TaskController(mock_api, config=Config(poll_delay_ms=1000, poll_hard_cap=3), sleep=fake_sleep)
        mock_api.run_task.return_value = {"id": "t"}
        mock_api.get_task.return_value = {"status": "running"}

        await controller.run(agent_request, 60)

        # capped at 3 polls plus the final fetch
        assert fake_sleep.await_args_list == [call(1.0)] * 3
        assert mock_api.get_task.await_count == 4
