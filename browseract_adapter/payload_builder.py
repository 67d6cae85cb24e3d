# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Payload Builder

Validates user-supplied node parameters and shapes them into the body
of the run-task endpoint.
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from browseract_adapter.core.errors import ValidationError
from browseract_adapter.core.logging import get_service_logger
from browseract_adapter.models import (
    ACCOUNT_PREFIX,
    INPUT_PREFIX,
    PASSWORD_PREFIX,
    AgentRunPayload,
    CredentialEntry,
    FieldSchemaEntry,
    InputParameter,
    RunMode,
    RunRequest,
    WorkflowRunPayload,
)

logger = get_service_logger("payload_builder")


def _trimmed(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _schema_entry(item: Union[FieldSchemaEntry, Mapping[str, Any]]) -> FieldSchemaEntry:
    if isinstance(item, FieldSchemaEntry):
        return item
    try:
        return FieldSchemaEntry.model_validate(item)
    except PydanticValidationError as e:
        field_id = item.get("id") if isinstance(item, Mapping) else None
        raise ValidationError(
            f"Invalid workflow input field '{field_id}'",
            fields=[str(field_id)],
            details={"errors": e.errors(include_url=False)}
        )


def build(mode: Union[RunMode, str], raw_fields: Mapping[str, Any]) -> RunRequest:
    """
    Build a run request from node parameters.

    Args:
        mode: agent or workflow
        raw_fields: Parameters keyed by node property name
            (task/agentId, or workflowId/workflowConfig)

    Returns:
        Immutable RunRequest

    Raises:
        ValidationError: If required fields are missing
    """
    mode = RunMode(mode)
    if mode == RunMode.AGENT:
        return build_agent_request(raw_fields.get("task"), raw_fields.get("agentId"))
    return build_workflow_request(raw_fields.get("workflowId"), raw_fields.get("workflowConfig"))


def build_agent_request(task: Any, agent_id: Any) -> RunRequest:
    """Task text is sent as given; only emptiness is checked on the trimmed value."""
    agent_value = _trimmed(agent_id)

    missing = [name for name, value in (("Task", _trimmed(task)), ("Agent", agent_value)) if not value]
    if missing:
        raise ValidationError(
            f"Please fill in the required fields: {', '.join(missing)}",
            fields=missing
        )

    return RunRequest(
        mode=RunMode.AGENT,
        payload=AgentRunPayload(task=str(task), agent_id=agent_value)
    )


def build_workflow_request(workflow_id: Any, workflow_config: Optional[Mapping[str, Any]]) -> RunRequest:
    """
    Route resource-mapper values into input parameters and credentials.

    Every required field is checked before failing so the user sees the
    full list of missing display names at once.
    """
    values = (workflow_config or {}).get("value")
    if not _trimmed(workflow_id) or values is None:
        raise ValidationError("Please select a workflow to run", fields=["Workflow"])

    schema: List[FieldSchemaEntry] = [
        _schema_entry(item) for item in (workflow_config.get("schema") or [])
    ]

    missing: List[str] = []
    input_parameters: List[InputParameter] = []
    credentials_map: Dict[str, Dict[str, str]] = {}

    for entry in schema:
        value = _trimmed(values.get(entry.id))
        if not value:
            missing.append(entry.display_name)
            continue

        if entry.id.startswith(INPUT_PREFIX):
            input_parameters.append(InputParameter(name=entry.id[len(INPUT_PREFIX):], value=value))
        elif entry.id.startswith(ACCOUNT_PREFIX):
            credentials_map.setdefault(entry.id[len(ACCOUNT_PREFIX):], {})["account"] = value
        elif entry.id.startswith(PASSWORD_PREFIX):
            credentials_map.setdefault(entry.id[len(PASSWORD_PREFIX):], {})["password"] = value

    if missing:
        raise ValidationError(
            f"Please fill in the required fields: {', '.join(missing)}",
            fields=missing
        )

    logger.debug(
        f"Workflow {workflow_id}: {len(input_parameters)} inputs, "
        f"credentials for {list(credentials_map)}"
    )

    return RunRequest(
        mode=RunMode.WORKFLOW,
        payload=WorkflowRunPayload(
            workflow_id=_trimmed(workflow_id),
            input_parameters=input_parameters,
            credentials=[
                CredentialEntry(platform=platform, **info)
                for platform, info in credentials_map.items()
            ]
        )
    )
