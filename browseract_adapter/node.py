# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
BrowserAct node - the surface the workflow-automation host talks to.

The host renders `description()`, calls the option loaders and the
resource-mapper resolver while the user edits the node, and calls
`execute()` with the node's input items.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Protocol

from browseract_adapter.api_client import TaskApiClient
from browseract_adapter.core.config import Config, get_config
from browseract_adapter.core.errors import ValidationError
from browseract_adapter.core.logging import get_service_logger
from browseract_adapter.credentials import BROWSER_ACT_API, BrowserActApiCredentials
from browseract_adapter.field_resolver import FieldResolver
from browseract_adapter.models import RunMode
from browseract_adapter.payload_builder import build
from browseract_adapter.task_controller import SleepFunc, TaskController
from browseract_adapter.transport import AuthenticatedTransport

logger = get_service_logger("node")

# (resource, operation) pairs the node supports
OPERATIONS = {
    ("agent", "runAgent"): RunMode.AGENT,
    ("workflow", "runWorkflow"): RunMode.WORKFLOW,
}

TransportFactory = Callable[[BrowserActApiCredentials, Config], AuthenticatedTransport]


class HostContext(Protocol):
    """What the node needs from the host at runtime."""

    def get_credentials(self, name: str) -> Optional[Dict[str, Any]]:
        ...

    def get_node_parameter(self, name: str, item_index: int, default: Any = None) -> Any:
        ...

    def get_input_data(self) -> List[Dict[str, Any]]:
        ...


def _default_transport(credentials: BrowserActApiCredentials, config: Config) -> AuthenticatedTransport:
    return AuthenticatedTransport(credentials, config=config)


class BrowserActNode:
    """
    Run BrowserAct agents and workflows from a host pipeline.

    Responsibilities:
    - Describe the node's properties and credential
    - Load agent/workflow options and workflow input fields
    - Run one task per input item and emit its final record
    """

    name = "browserAct"
    display_name = "BrowserAct"

    def __init__(
        self,
        config: Optional[Config] = None,
        transport_factory: TransportFactory = _default_transport,
        sleep: SleepFunc = asyncio.sleep
    ):
        self.config = config or get_config()
        self._transport_factory = transport_factory
        self._sleep = sleep

    def description(self) -> Dict[str, Any]:
        """Declarative node description rendered by the host."""
        run_agent = {"show": {"operation": ["runAgent"]}}
        run_workflow = {"show": {"operation": ["runWorkflow"]}}

        return {
            "displayName": self.display_name,
            "name": self.name,
            "group": ["action"],
            "version": 1,
            "description": "Run BrowserAct agents and workflows",
            "inputs": ["main"],
            "outputs": ["main"],
            "credentials": [
                {"displayName": "BrowserAct API Key", "name": BROWSER_ACT_API, "required": True}
            ],
            "properties": [
                {
                    "displayName": "Resource",
                    "name": "resource",
                    "type": "options",
                    "noDataExpression": True,
                    "options": [
                        {"name": "Agent", "value": "agent"},
                        {"name": "Workflow", "value": "workflow"},
                    ],
                    "default": "agent",
                },
                {
                    "displayName": "Operation",
                    "name": "operation",
                    "type": "options",
                    "noDataExpression": True,
                    "options": [{"name": "Run an Agent", "value": "runAgent", "action": "Run an agent"}],
                    "default": "runAgent",
                    "displayOptions": {"show": {"resource": ["agent"]}},
                },
                {
                    "displayName": "Operation",
                    "name": "operation",
                    "type": "options",
                    "noDataExpression": True,
                    "options": [{"name": "Run a Workflow", "value": "runWorkflow", "action": "Run a workflow"}],
                    "default": "runWorkflow",
                    "displayOptions": {"show": {"resource": ["workflow"]}},
                },
                {
                    "displayName": "Workflow",
                    "name": "workflowId",
                    "type": "options",
                    "typeOptions": {"loadOptionsMethod": "getWorkflows"},
                    "required": True,
                    "default": "",
                    "description": "Select a workflow to run",
                    "displayOptions": run_workflow,
                },
                {
                    "displayName": "Workflow Inputs",
                    "name": "workflowConfig",
                    "type": "resourceMapper",
                    "noDataExpression": True,
                    "default": {"mappingMode": "defineBelow", "value": None},
                    "required": True,
                    "typeOptions": {
                        "loadOptionsDependsOn": ["workflowId"],
                        "resourceMapper": {
                            "resourceMapperMethod": "getWorkflowInputs",
                            "mode": "update",
                            "addAllFields": False,
                        },
                    },
                    "displayOptions": run_workflow,
                },
                {
                    "displayName": "Agent",
                    "name": "agentId",
                    "type": "options",
                    "typeOptions": {"loadOptionsMethod": "getAgents", "allowManualInput": True},
                    "required": True,
                    "default": "",
                    "description": "Select an agent from the list or enter an ID manually",
                    "displayOptions": run_agent,
                },
                {
                    "displayName": "Task",
                    "name": "task",
                    "type": "string",
                    "required": True,
                    "default": "",
                    "description": "Use natural language to describe the task you want the Agent to perform",
                    "displayOptions": run_agent,
                },
                {
                    "displayName": "Timeout",
                    "name": "timeout",
                    "type": "number",
                    "required": True,
                    "default": self.config.default_timeout_seconds,
                    "description": "Timeout for the run, in seconds",
                },
            ],
        }

    @asynccontextmanager
    async def _api(self, host: HostContext) -> AsyncIterator[TaskApiClient]:
        credentials = BrowserActApiCredentials.from_host(host.get_credentials(BROWSER_ACT_API))
        async with self._transport_factory(credentials, self.config) as transport:
            yield TaskApiClient(transport, config=self.config)

    # -- Option loaders --

    async def get_agents(self, host: HostContext) -> List[Dict[str, str]]:
        async with self._api(host) as api:
            options = await FieldResolver(api).list_agents()
        return [option.model_dump() for option in options]

    async def get_workflows(self, host: HostContext) -> List[Dict[str, str]]:
        async with self._api(host) as api:
            options = await FieldResolver(api).list_workflows()
        return [option.model_dump() for option in options]

    # -- Resource mapper --

    async def get_workflow_inputs(self, host: HostContext) -> Dict[str, Any]:
        """Fields for the workflow currently selected on the node."""
        workflow_id = host.get_node_parameter("workflowId", 0)
        if not workflow_id:
            return {"fields": []}

        async with self._api(host) as api:
            fields = await FieldResolver(api).get_workflow_field_schema(str(workflow_id))
        return {"fields": [entry.to_host() for entry in fields]}

    # -- Execution --

    def _raw_fields(self, host: HostContext, mode: RunMode, index: int) -> Dict[str, Any]:
        if mode == RunMode.AGENT:
            names = ("task", "agentId")
        else:
            names = ("workflowId", "workflowConfig")
        return {name: host.get_node_parameter(name, index) for name in names}

    async def execute(self, host: HostContext) -> List[Dict[str, Any]]:
        """
        Run one task per input item, in order.

        Returns:
            One output record per input item

        Raises:
            ValidationError: If an item's parameters are incomplete
            TransportError: If any API call for an item fails
        """
        items = host.get_input_data()
        records: List[Dict[str, Any]] = []

        async with self._api(host) as api:
            controller = TaskController(api, config=self.config, sleep=self._sleep)

            for index in range(len(items)):
                resource = host.get_node_parameter("resource", index)
                operation = host.get_node_parameter("operation", index)
                mode = OPERATIONS.get((resource, operation))
                if mode is None:
                    raise ValidationError(
                        f"Unsupported operation '{operation}' for resource '{resource}'",
                        item_index=index
                    )

                try:
                    request = build(mode, self._raw_fields(host, mode, index))
                except ValidationError as e:
                    e.item_index = index
                    raise

                timeout = host.get_node_parameter("timeout", index, self.config.default_timeout_seconds)
                logger.info(f"Item {index}: running {mode.value} task")

                result = await controller.run(request, timeout)
                records.append(result.to_record())

        return records
