# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
BrowserAct task adapter.

Runs BrowserAct agents and workflows from a workflow-automation host and
waits for their final task record.
"""

from browseract_adapter.api_client import TaskApiClient
from browseract_adapter.field_resolver import FieldResolver
from browseract_adapter.node import BrowserActNode, HostContext
from browseract_adapter.payload_builder import build
from browseract_adapter.task_controller import TaskController
from browseract_adapter.transport import AuthenticatedTransport

__all__ = [
    "AuthenticatedTransport",
    "BrowserActNode",
    "FieldResolver",
    "HostContext",
    "TaskApiClient",
    "TaskController",
    "build",
]
