# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Dynamic Field Resolver

Populates the host's agent/workflow dropdowns and turns a workflow's
declared inputs and credential slots into the fields a user must fill.
"""

from typing import Any, List

from browseract_adapter.api_client import TaskApiClient
from browseract_adapter.core.errors import ApiError
from browseract_adapter.core.logging import get_service_logger
from browseract_adapter.models import (
    ACCOUNT_PREFIX,
    INPUT_PREFIX,
    PASSWORD_PREFIX,
    FieldSchemaEntry,
    OptionItem,
)

logger = get_service_logger("field_resolver")

INPUT_PARAMETERS_NODE = "INPUT_PARAMETERS"


def _declared_values(properties: dict, key: str) -> List[Any]:
    section = properties.get(key)
    if not isinstance(section, dict):
        return []
    value = section.get("value")
    return value if isinstance(value, list) else []


class FieldResolver:
    """
    Resolves selectable options and per-workflow field schemas.

    Responsibilities:
    - List agents and workflows (first page only)
    - Introspect a workflow's INPUT_PARAMETERS node
    """

    def __init__(self, api: TaskApiClient):
        self.api = api

    async def list_agents(self) -> List[OptionItem]:
        """
        List agents available to the API key.

        Returns:
            Options with the agent name as label and id as value

        Raises:
            ApiError: If the response has no items array
        """
        response = await self.api.list_agents()
        return self._to_options(response, "agents")

    async def list_workflows(self) -> List[OptionItem]:
        """
        List workflows available to the API key.

        Raises:
            ApiError: If the response has no items array
        """
        response = await self.api.list_workflows()
        return self._to_options(response, "workflows")

    def _to_options(self, response: Any, kind: str) -> List[OptionItem]:
        items = response.get("items") if isinstance(response, dict) else None
        if not isinstance(items, list):
            logger.error(f"Malformed {kind} list response")
            raise ApiError(f"Unexpected response when listing {kind}", response=response)

        # Only page 1 is fetched
        if len(items) >= self.api.config.page_size:
            logger.debug(f"{kind} list hit page size {self.api.config.page_size}; later pages not fetched")

        return [
            OptionItem(name=str(item.get("name", "")), value=str(item.get("id", "")))
            for item in items
            if isinstance(item, dict)
        ]

    async def get_workflow_field_schema(self, workflow_id: str) -> List[FieldSchemaEntry]:
        """
        Build the field schema for a workflow.

        Input parameters come first as input-<name>, then each credential
        platform as password-<platform> followed by account-<platform>.
        Missing or malformed config yields an empty list.

        Args:
            workflow_id: Workflow identifier

        Returns:
            Ordered list of field schema entries
        """
        response = await self.api.get_workflow_config(workflow_id)

        dsl = response.get("dsl") if isinstance(response, dict) else None
        nodes = dsl.get("nodes") if isinstance(dsl, dict) else None
        if not isinstance(nodes, list):
            logger.debug(f"Workflow {workflow_id} has no DSL nodes")
            return []

        node = next(
            (n for n in nodes if isinstance(n, dict) and n.get("type") == INPUT_PARAMETERS_NODE),
            None
        )
        properties = node.get("properties") if node else None
        if not isinstance(properties, dict):
            return []

        fields: List[FieldSchemaEntry] = []

        for item in _declared_values(properties, "input_parameters"):
            name = item.get("name") if isinstance(item, dict) else None
            if not name:
                continue
            fields.append(FieldSchemaEntry(id=f"{INPUT_PREFIX}{name}", display_name=str(name)))

        for item in _declared_values(properties, "credentials"):
            platform = item.get("platform") if isinstance(item, dict) else None
            if not platform:
                continue
            fields.append(
                FieldSchemaEntry(id=f"{PASSWORD_PREFIX}{platform}", display_name=f"Password: {platform}")
            )
            fields.append(
                FieldSchemaEntry(id=f"{ACCOUNT_PREFIX}{platform}", display_name=f"Account: {platform}")
            )

        logger.debug(f"Workflow {workflow_id} declares {len(fields)} fields")
        return fields
