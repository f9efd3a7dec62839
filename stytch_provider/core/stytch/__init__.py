"""Stytch Management API client library.

This package provides a modular, testable interface to the Management API.

Architecture:
- client.py: HTTP client with basic auth and error mapping
- migration.py: legacy (v1) project lookup
- projects.py: project lifecycle
- redirect_urls.py, password_config.py, rbac_policy.py, jwt_templates.py,
  event_log_streaming.py, trusted_token_profiles.py, email_templates.py,
  public_tokens.py, secrets.py, sdk_config.py, country_code_allowlist.py:
  one service per API area
- exceptions.py: Typed exceptions for error handling

Usage:
    from stytch_provider.core.stytch import StytchClient, RedirectURLService
    
    client = StytchClient(workspace_key_id="...", workspace_key_secret="...")
    urls = RedirectURLService(client)
    url = urls.get("my-project", "production", "https://example.com/callback")
"""
from .client import StytchClient, REQUEST_TIMEOUT, DEFAULT_BASE_URL
from .exceptions import (
    StytchError,
    StytchConfigurationError,
    StytchAPIError,
    StytchNotFoundError,
)
from .migration import LegacyProject, MigrationService
from .projects import ProjectService, VERTICALS
from .redirect_urls import RedirectURLService, REDIRECT_URL_TYPES
from .password_config import PasswordConfigService, VALIDATION_POLICIES
from .rbac_policy import RBACPolicyService
from .jwt_templates import JWTTemplateService, JWT_TEMPLATE_TYPES
from .event_log_streaming import (
    EventLogStreamingService,
    DESTINATION_TYPES,
    DATADOG_SITES,
    STREAMING_STATUS_ACTIVE,
)
from .trusted_token_profiles import TrustedTokenProfileService, PUBLIC_KEY_TYPES
from .email_templates import EmailTemplateService
from .public_tokens import PublicTokenService
from .secrets import SecretService
from .sdk_config import SDKConfigService
from .country_code_allowlist import (
    CountryCodeAllowlistService,
    DELIVERY_METHODS,
    DEFAULT_COUNTRY_CODES,
)

__all__ = [
    # Client
    "StytchClient",
    "REQUEST_TIMEOUT",
    "DEFAULT_BASE_URL",
    
    # Exceptions
    "StytchError",
    "StytchConfigurationError",
    "StytchAPIError",
    "StytchNotFoundError",
    
    # Services
    "LegacyProject",
    "MigrationService",
    "ProjectService",
    "RedirectURLService",
    "PasswordConfigService",
    "RBACPolicyService",
    "JWTTemplateService",
    "EventLogStreamingService",
    "TrustedTokenProfileService",
    "EmailTemplateService",
    "PublicTokenService",
    "SecretService",
    "SDKConfigService",
    "CountryCodeAllowlistService",
    
    # Enumerations
    "VERTICALS",
    "REDIRECT_URL_TYPES",
    "VALIDATION_POLICIES",
    "JWT_TEMPLATE_TYPES",
    "DESTINATION_TYPES",
    "DATADOG_SITES",
    "STREAMING_STATUS_ACTIVE",
    "PUBLIC_KEY_TYPES",
    "DELIVERY_METHODS",
    "DEFAULT_COUNTRY_CODES",
]
