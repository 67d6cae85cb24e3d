# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
BrowserAct Task API Client

Issues calls against the agent and workflow task endpoints. Every call
carries the channel identification header; authentication and base URL
are the transport's job.
"""

from typing import Any, Dict, Optional

from browseract_adapter.core.config import Config, get_config
from browseract_adapter.core.logging import get_service_logger
from browseract_adapter.models import RunMode
from browseract_adapter.transport import AuthenticatedTransport

logger = get_service_logger("api_client")


class TaskApiClient:
    """
    BrowserAct REST client.

    Stateless apart from its transport; safe to share across input items.
    """

    def __init__(self, transport: AuthenticatedTransport, config: Optional[Config] = None):
        self.transport = transport
        self.config = config or get_config()

    async def call(
        self,
        method: str,
        endpoint: str,
        body: Optional[Dict[str, Any]] = None,
        query: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Call an endpoint and return the parsed JSON.

        Args:
            method: GET, POST, PUT or DELETE
            endpoint: Path such as /agent/run-task
            body: JSON body
            query: Query string parameters

        Returns:
            Parsed JSON response

        Raises:
            TransportError: If the request fails
        """
        logger.debug(f"{method} {endpoint} query={query}")
        return await self.transport.request(
            method,
            endpoint,
            headers={self.config.channel_header: self.config.channel_key},
            json=body,
            params=query
        )

    async def list_agents(self) -> Any:
        return await self.call(
            "GET",
            "/agent/list-agents",
            query={"page": 1, "perPage": self.config.page_size}
        )

    async def list_workflows(self) -> Any:
        return await self.call(
            "GET",
            "/workflow/list-workflows",
            query={"page": 1, "perPage": self.config.page_size}
        )

    async def get_workflow_config(self, workflow_id: str) -> Any:
        return await self.call(
            "GET",
            "/workflow/get-workflow-config",
            query={"workflow_id": workflow_id}
        )

    async def run_task(self, mode: RunMode, body: Dict[str, Any]) -> Any:
        return await self.call("POST", f"/{mode.value}/run-task", body=body)

    async def get_task(self, mode: RunMode, task_id: str) -> Any:
        return await self.call("GET", f"/{mode.value}/get-task", query={"task_id": task_id})

    async def stop_task(self, mode: RunMode, task_id: str) -> Any:
        return await self.call("PUT", f"/{mode.value}/stop-task", query={"task_id": task_id})
