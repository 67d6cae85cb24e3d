# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
BrowserAct adapter configuration - Single source of truth.
YAML is king. Env vars ONLY for secrets and deployment overrides.
"""

import os
import yaml
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from browseract_adapter.core.errors import ConfigurationError

load_dotenv()


DEFAULT_CONFIG_PATH = "/app/configs/browseract.yaml"


# =============================================================================
# CONFIGURATION DATACLASS
# =============================================================================

@dataclass(frozen=True)
class Config:
    """
    Immutable adapter configuration.
    All values from YAML. No hidden state.
    """

    # -- API --
    base_url: str = "https://api.browseract.com/v2"
    channel_header: str = "api-channel-ak"
    channel_key: str = "n8nak"
    page_size: int = 500

    # -- HTTP --
    http_timeout: float = 30.0

    # -- Polling --
    # The service kills tasks after 24h; 16560 polls at 5s is 23h.
    poll_delay_ms: int = 5000
    poll_hard_cap: int = 16560
    default_timeout_seconds: int = 3600

    # -- Logging --
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def poll_delay_seconds(self) -> float:
        return self.poll_delay_ms / 1000


# =============================================================================
# SECRETS - The ONLY thing from environment variables
# =============================================================================

def get_api_key() -> Optional[str]:
    """API keys cannot be in version control."""
    return os.getenv("BROWSERACT_API_KEY")


# =============================================================================
# LOADER
# =============================================================================

def load_config(path: str = DEFAULT_CONFIG_PATH) -> Config:
    """
    Load configuration from YAML.
    Returns defaults if file doesn't exist.

    Raises:
        ConfigurationError: If the file exists but is not a YAML mapping
    """
    if not Path(path).exists():
        return Config(
            base_url=os.getenv("BROWSERACT_BASE_URL", Config.base_url),
            log_level=os.getenv("LOG_LEVEL", Config.log_level),
        )

    try:
        with open(path) as f:
            y = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file: {e}", config_file=path)

    if not isinstance(y, dict):
        raise ConfigurationError("Config file must contain a mapping", config_file=path)

    # Helper to safely navigate nested dicts
    def get(d: dict, *keys, default=None):
        for k in keys:
            if not isinstance(d, dict):
                return default
            d = d.get(k, {})
        return d if d != {} else default

    return Config(
        # API
        base_url=os.getenv("BROWSERACT_BASE_URL") or get(y, "api", "base_url") or Config.base_url,
        channel_header=get(y, "api", "channel_header") or Config.channel_header,
        channel_key=get(y, "api", "channel_key") or Config.channel_key,
        page_size=get(y, "api", "page_size") or Config.page_size,

        # HTTP
        http_timeout=get(y, "http", "timeout") or Config.http_timeout,

        # Polling
        poll_delay_ms=get(y, "polling", "delay_ms") or Config.poll_delay_ms,
        poll_hard_cap=get(y, "polling", "hard_cap") or Config.poll_hard_cap,
        default_timeout_seconds=get(y, "polling", "default_timeout_seconds") or Config.default_timeout_seconds,

        # Logging
        log_level=os.getenv("LOG_LEVEL") or get(y, "logging", "level") or Config.log_level,
        log_format=get(y, "logging", "format") or Config.log_format,
    )


# =============================================================================
# GLOBAL INSTANCE
# =============================================================================

_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create global config instance."""
    global _config
    if _config is None:
        config_path = os.getenv("BROWSERACT_CONFIG_PATH", DEFAULT_CONFIG_PATH)
        _config = load_config(config_path)
    return _config


def reload_config() -> Config:
    """Force reload configuration."""
    global _config
    _config = None
    return get_config()
