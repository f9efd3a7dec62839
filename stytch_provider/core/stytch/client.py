"""Low-level HTTP client for the Stytch Management API.

Handles authentication, URL building, and error mapping.
"""
from __future__ import annotations
import logging
import os
from typing import Optional, Dict, Any

import requests

from .exceptions import StytchAPIError, StytchConfigurationError, StytchNotFoundError

REQUEST_TIMEOUT = 30
DEFAULT_BASE_URL = "https://management.stytch.com"

logger = logging.getLogger(__name__)


class StytchClient:
    """HTTP client for the Stytch Management API.
    
    Features:
    - HTTP basic authentication with a workspace management key
    - Centralized error handling (JSON error envelope -> StytchAPIError)
    - Decoded JSON bodies returned from every verb
    
    Usage:
        client = StytchClient(workspace_key_id="workspace-key-...", workspace_key_secret="...")
        body = client.get("/pwa/v3/projects/my-project")
    """
    
    def __init__(
        self,
        base_url: Optional[str] = None,
        workspace_key_id: Optional[str] = None,
        workspace_key_secret: Optional[str] = None,
        timeout: int = REQUEST_TIMEOUT,
    ):
        """Initialize Stytch client.
        
        Args:
            base_url: Management API base URL (defaults to STYTCH_MANAGEMENT_BASE_URL env var)
            workspace_key_id: Workspace key ID (defaults to STYTCH_WORKSPACE_KEY_ID env var)
            workspace_key_secret: Workspace key secret (defaults to STYTCH_WORKSPACE_KEY_SECRET env var)
            timeout: Per-request timeout in seconds
        """
        self.base_url = (base_url or os.environ.get("STYTCH_MANAGEMENT_BASE_URL", DEFAULT_BASE_URL)).rstrip("/")
        self.workspace_key_id = workspace_key_id or os.environ.get("STYTCH_WORKSPACE_KEY_ID", "")
        self._workspace_key_secret = workspace_key_secret or os.environ.get("STYTCH_WORKSPACE_KEY_SECRET", "")
        self.timeout = timeout
    
    @classmethod
    def from_config(cls, config) -> "StytchClient":
        """Build a client from a ProviderConfig."""
        return cls(
            base_url=config.base_url,
            workspace_key_id=config.workspace_key_id,
            workspace_key_secret=config.workspace_key_secret,
            timeout=config.request_timeout,
        )
    
    def _ensure_credentials(self) -> None:
        if not self.workspace_key_id or not self._workspace_key_secret:
            raise StytchConfigurationError(
                "Missing workspace key credentials - set STYTCH_WORKSPACE_KEY_ID and STYTCH_WORKSPACE_KEY_SECRET"
            )
    
    def get(self, path: str, params: Optional[Dict] = None) -> Dict[str, Any]:
        """Execute GET request.
        
        Args:
            path: API endpoint path (e.g., "/pwa/v3/projects/my-project")
            params: Query parameters
            
        Returns:
            Decoded JSON body
            
        Raises:
            StytchAPIError: On HTTP error
        """
        return self._request("GET", path, params=params)
    
    def post(self, path: str, json: Optional[Dict] = None) -> Dict[str, Any]:
        """Execute POST request with a JSON payload."""
        return self._request("POST", path, json=json)
    
    def put(self, path: str, json: Optional[Dict] = None) -> Dict[str, Any]:
        """Execute PUT request with a JSON payload."""
        return self._request("PUT", path, json=json)
    
    def patch(self, path: str, json: Optional[Dict] = None) -> Dict[str, Any]:
        """Execute PATCH request with a JSON payload."""
        return self._request("PATCH", path, json=json)
    
    def delete(self, path: str, params: Optional[Dict] = None, json: Optional[Dict] = None) -> Dict[str, Any]:
        """Execute DELETE request."""
        return self._request("DELETE", path, params=params, json=json)
    
    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict] = None,
        json: Optional[Dict] = None,
    ) -> Dict[str, Any]:
        self._ensure_credentials()
        url = f"{self.base_url}{path}"
        logger.debug(f"[client] {method} {url}")
        try:
            resp = requests.request(
                method,
                url,
                params=params,
                json=json,
                auth=(self.workspace_key_id, self._workspace_key_secret),
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise StytchAPIError(0, str(exc), url) from exc
        
        self._handle_error(resp)
        if not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError as exc:
            raise StytchAPIError(resp.status_code, f"Invalid JSON in response: {exc}", url) from exc
    
    def _handle_error(self, resp: requests.Response) -> None:
        """Centralized error handling for HTTP responses.
        
        Args:
            resp: Response object to check
            
        Raises:
            StytchNotFoundError: If the response status is 404
            StytchAPIError: If response status indicates any other error
        """
        if resp.status_code < 400:
            return
        
        message = resp.text
        request_id = None
        error_type = None
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("error_message") or message
            request_id = body.get("request_id")
            error_type = body.get("error_type")
        
        error_cls = StytchNotFoundError if resp.status_code == 404 else StytchAPIError
        raise error_cls(resp.status_code, message, resp.url, request_id=request_id, error_type=error_type)
