"""Resolution of legacy (v1) project IDs to v3 project/environment slugs.

State written by v1 resources stores a single opaque ``project_id``, which
is either the live or the test half of a project. The v3 API addresses the
same thing as ``(project_slug, environment_slug)``. The migration endpoint
returns both halves of the project, and the identifier is matched against
them to pick the environment.

Live environments without a recorded slug fall back to ``production``. Test
environments have no default: a test project without a slug is an error.
"""
from __future__ import annotations
import logging
from typing import Protocol, Tuple

from .diagnostics import DiagnosticError
from .stytch.exceptions import StytchError
from .stytch.migration import LegacyProject

DEFAULT_LIVE_ENVIRONMENT_SLUG = "production"

logger = logging.getLogger(__name__)


class LegacyProjectLookup(Protocol):
    """Anything that can fetch a legacy project record (MigrationService, test fakes)."""
    
    def get_legacy_project(self, project_id: str) -> LegacyProject:
        ...


class LegacyResolutionError(DiagnosticError):
    """Base class for failures resolving a legacy project ID."""


class MissingIdentifierError(LegacyResolutionError):
    def __init__(self):
        super().__init__(
            "Missing legacy project ID",
            "The stored Terraform state did not contain a project identifier, so it cannot be upgraded automatically.",
        )


class LookupFailedError(LegacyResolutionError):
    def __init__(self, project_id: str, cause: Exception):
        self.project_id = project_id
        self.cause = cause
        super().__init__("Failed to retrieve legacy project metadata", str(cause))


class MissingSlugError(LegacyResolutionError):
    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(
            "Missing project slug",
            f"The migration endpoint returned an empty project slug for project ID {project_id}.",
        )


class UnknownIdentifierError(LegacyResolutionError):
    def __init__(self, project_id: str, project_slug: str):
        self.project_id = project_id
        self.project_slug = project_slug
        super().__init__(
            "Unknown legacy project identifier",
            f"Project ID {project_id} did not match the live or test project associated with slug {project_slug}.",
        )


class MissingEnvironmentSlugError(LegacyResolutionError):
    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(
            "Missing environment slug",
            f"No environment slug could be determined for project ID {project_id}.",
        )


class LegacyProjectResolver:
    """Resolve legacy project IDs through an injected lookup.
    
    Usage:
        resolver = LegacyProjectResolver(MigrationService(client))
        project_slug, environment_slug = resolver.resolve("project-live-...")
    """
    
    def __init__(self, lookup: LegacyProjectLookup):
        self.lookup = lookup
    
    def resolve_project(self, project_id: str) -> LegacyProject:
        """Fetch the legacy project record and check it carries a slug.
        
        Raises:
            MissingIdentifierError: project_id is empty (no lookup is made)
            LookupFailedError: the platform call failed
            MissingSlugError: the record has no project slug
        """
        if not project_id:
            raise MissingIdentifierError()
        
        try:
            project = self.lookup.get_legacy_project(project_id)
        except StytchError as exc:
            logger.warning(f"[migration] Legacy project lookup failed for {project_id}: {exc}")
            raise LookupFailedError(project_id, exc) from exc
        
        if not project.project_slug:
            raise MissingSlugError(project_id)
        return project
    
    def resolve(self, project_id: str) -> Tuple[str, str]:
        """Return ``(project_slug, environment_slug)`` for a legacy project ID.
        
        Raises:
            LegacyResolutionError: one of the subclasses above, or
                UnknownIdentifierError / MissingEnvironmentSlugError
        """
        project = self.resolve_project(project_id)
        
        if project_id == project.live_project_id:
            environment_slug = project.live_environment_slug or DEFAULT_LIVE_ENVIRONMENT_SLUG
        elif project_id == project.test_project_id:
            environment_slug = project.test_environment_slug
        else:
            raise UnknownIdentifierError(project_id, project.project_slug)
        
        if not environment_slug:
            raise MissingEnvironmentSlugError(project_id)
        
        logger.info(f"[migration] Resolved {project_id} to {project.project_slug}/{environment_slug}")
        return project.project_slug, environment_slug


def resolve_legacy_project_and_environment(lookup: LegacyProjectLookup, project_id: str) -> Tuple[str, str]:
    """Standalone form of ``LegacyProjectResolver(lookup).resolve(project_id)``."""
    return LegacyProjectResolver(lookup).resolve(project_id)
