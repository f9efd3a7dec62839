"""Core provider logic, independent of the command line.

Module Structure:
    - stytch/            : Management API client library
    - legacy_resolver.py : legacy project ID -> (project_slug, environment_slug)
    - diagnostics.py     : operator-facing diagnostics and DiagnosticError
    - schema.py          : attribute schemas, validation and planning
    - plan_modifiers.py  : use_state_for_unknown, requires_replace, preserve_sensitive_value
    - validators.py      : attribute validators and import ID parsing

Usage Pattern:
    Import explicitly when needed:
        from stytch_provider.core.legacy_resolver import LegacyProjectResolver
        from stytch_provider.core.schema import Schema, Attribute, UNKNOWN
        from stytch_provider.core.stytch import StytchClient
"""
