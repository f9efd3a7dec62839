"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://management.stytch.com"
DEFAULT_REQUEST_TIMEOUT = 30


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).
    
    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)
    
    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback
    
    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name
    
    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
            if secret_value:
                logger.info(f"[settings] Loaded {secret_name} from /run/secrets")
                return secret_value
        except OSError as e:
            logger.warning(f"[settings] Failed to read /run/secrets/{secret_name}: {e}")
    
    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            logger.info(f"[settings] Loaded {env_var} from environment (fallback)")
            return secret_value
    
    return None


def _parse_timeout(raw: Optional[str]) -> int:
    if not raw:
        return DEFAULT_REQUEST_TIMEOUT
    try:
        timeout = int(raw)
    except ValueError:
        raise RuntimeError(f"STYTCH_REQUEST_TIMEOUT must be an integer, got: {raw!r}")
    if timeout <= 0:
        raise RuntimeError("STYTCH_REQUEST_TIMEOUT must be positive")
    return timeout


@dataclass
class ProviderConfig:
    """Provider configuration container."""
    workspace_key_id: str = ""
    workspace_key_secret: str = ""
    base_url: str = DEFAULT_BASE_URL
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT
    log_level: str = "INFO"
    
    def validate(self) -> list[str]:
        """Return a list of configuration problems (empty when usable)."""
        problems = []
        if not self.workspace_key_id:
            problems.append(
                "STYTCH_WORKSPACE_KEY_ID is not set. "
                "Create a workspace management key in the Stytch dashboard."
            )
        if not self.workspace_key_secret:
            problems.append(
                "STYTCH_WORKSPACE_KEY_SECRET not found in /run/secrets or environment."
            )
        if not self.base_url.startswith(("https://", "http://")):
            problems.append(f"Invalid management API base URL: {self.base_url}")
        return problems
    
    def redacted(self) -> dict:
        """Configuration summary that is safe to log."""
        return {
            "workspace_key_id": self.workspace_key_id,
            "workspace_key_secret": "***" if self.workspace_key_secret else "",
            "base_url": self.base_url,
            "request_timeout": self.request_timeout,
            "log_level": self.log_level,
        }


def load_settings() -> ProviderConfig:
    """Load provider settings from environment and /run/secrets."""
    workspace_key_id = os.environ.get("STYTCH_WORKSPACE_KEY_ID", "").strip()
    workspace_key_secret = _load_secret_from_file(
        "stytch_workspace_key_secret",
        "STYTCH_WORKSPACE_KEY_SECRET",
    ) or ""
    
    base_url = os.environ.get("STYTCH_MANAGEMENT_BASE_URL", DEFAULT_BASE_URL).strip().rstrip("/")
    request_timeout = _parse_timeout(os.environ.get("STYTCH_REQUEST_TIMEOUT"))
    log_level = os.environ.get("STYTCH_LOG_LEVEL", "INFO").strip().upper() or "INFO"
    
    config = ProviderConfig(
        workspace_key_id=workspace_key_id,
        workspace_key_secret=workspace_key_secret,
        base_url=base_url or DEFAULT_BASE_URL,
        request_timeout=request_timeout,
        log_level=log_level,
    )
    logger.debug(f"[settings] Loaded provider settings: {config.redacted()}")
    return config
