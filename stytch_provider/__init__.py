"""Stytch configuration-management provider package.

To use the provider:
    from stytch_provider.provider import StytchProvider

To use the Management API client directly:
    from stytch_provider.core.stytch import StytchClient, RedirectURLService

To resolve a legacy (v1) project ID:
    from stytch_provider.core.legacy_resolver import LegacyProjectResolver
"""

__version__ = "0.1.0"
