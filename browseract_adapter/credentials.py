# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
BrowserAct API credential type.

Declares the credential the host stores for this node and how it is
turned into request headers.
"""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field

from browseract_adapter.core.config import get_api_key
from browseract_adapter.core.errors import ConfigurationError


BROWSER_ACT_API = "browserActApi"


class BrowserActApiCredentials(BaseModel):
    """
    Stored API key for the BrowserAct service.

    Attributes:
        api_key: Secret key issued by BrowserAct
    """
    api_key: str = Field(repr=False)

    name: str = BROWSER_ACT_API
    display_name: str = "BrowserAct API"
    documentation_url: str = "https://www.browseract.com/"

    @staticmethod
    def properties() -> List[Dict[str, Any]]:
        """Fields the host renders when the credential is created."""
        return [
            {
                "displayName": "BrowserAct API Key",
                "name": "apiKey",
                "type": "string",
                "typeOptions": {"password": True},
                "default": "",
            }
        ]

    @classmethod
    def from_host(cls, data: Optional[Mapping[str, Any]]) -> "BrowserActApiCredentials":
        """
        Build credentials from the host's stored record.

        Falls back to BROWSERACT_API_KEY when the host has none.

        Raises:
            ConfigurationError: If no API key is available
        """
        api_key = (data or {}).get("apiKey") or get_api_key()
        if not api_key:
            raise ConfigurationError(
                f"Credential '{BROWSER_ACT_API}' has no API key and BROWSERACT_API_KEY is not set"
            )
        return cls(api_key=api_key)

    def get_authorization_headers(self) -> Dict[str, str]:
        """
        Headers injected into every authenticated request.

        Returns:
            Dictionary with the bearer Authorization header
        """
        return {"Authorization": f"Bearer {self.api_key}"}
