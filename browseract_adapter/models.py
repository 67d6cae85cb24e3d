# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
BrowserAct Adapter Models

Pydantic models for run requests, field schemas and task results.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


TERMINAL_STATUSES = frozenset({"finished", "canceled", "paused", "failed"})

INPUT_PREFIX = "input-"
ACCOUNT_PREFIX = "account-"
PASSWORD_PREFIX = "password-"


class RunMode(str, Enum):
    """Kind of remote run. The value is also the API route prefix."""
    AGENT = "agent"
    WORKFLOW = "workflow"


class TaskState(str, Enum):
    """How a controller run ended."""
    COMPLETED = "completed"
    TIMED_OUT = "timed_out"
    NOT_STARTED = "not_started"


class OptionItem(BaseModel):
    """One entry of a host dropdown"""
    name: str
    value: str


class FieldSchemaEntry(BaseModel):
    """
    One user-fillable slot declared by a workflow.

    The id prefix (input-, account-, password-) decides which payload
    bucket the value lands in; the remainder is the parameter name or
    credential platform.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    display_name: str = Field(alias="displayName")
    required: bool = True
    type: str = "string"
    display: bool = True
    default_match: bool = Field(default=True, alias="defaultMatch")

    def to_host(self) -> Dict[str, Any]:
        """Serialize with the host's camelCase keys."""
        return self.model_dump(by_alias=True)


class InputParameter(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: str


class CredentialEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    platform: str
    account: Optional[str] = None
    password: Optional[str] = None


class AgentRunPayload(BaseModel):
    """Body of POST /agent/run-task"""
    model_config = ConfigDict(frozen=True)

    task: str = Field(min_length=1)
    agent_id: str = Field(min_length=1)


class WorkflowRunPayload(BaseModel):
    """Body of POST /workflow/run-task"""
    model_config = ConfigDict(frozen=True)

    workflow_id: str
    input_parameters: List[InputParameter] = []
    credentials: List[CredentialEntry] = []


class RunRequest(BaseModel):
    """A validated submission for one input item."""
    model_config = ConfigDict(frozen=True)

    mode: RunMode
    payload: Union[AgentRunPayload, WorkflowRunPayload]

    def body(self) -> Dict[str, Any]:
        """JSON body for the run-task endpoint."""
        return self.payload.model_dump()


class TaskResult(BaseModel):
    """Outcome of one submit/poll/stop cycle"""
    task_id: Optional[str] = None
    detail: Optional[Dict[str, Any]] = None
    state: TaskState
    attempts: int = 0

    @property
    def status(self) -> Optional[str]:
        if self.detail is None:
            return None
        return self.detail.get("status")

    def to_record(self) -> Dict[str, Any]:
        """Output record handed back to the host pipeline."""
        if self.detail is not None:
            return self.detail
        return {"error": "Error", "taskId": self.task_id}
