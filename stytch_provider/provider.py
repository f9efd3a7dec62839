"""Provider entry point: configuration, resource registry, state upgrades."""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Type

from .config import ProviderConfig, load_settings
from .core.diagnostics import DiagnosticError
from .core.stytch import StytchClient
from .resources import RESOURCES, Resource

logger = logging.getLogger(__name__)


class StytchProvider:
    """Holds the shared API client and hands it to resources.
    
    Resources are built on demand by ``resource(type_name)``. Before
    ``configure()`` they get no client, which is enough for offline
    validation and planning.
    """
    
    def __init__(
        self,
        config: Optional[ProviderConfig] = None,
        resources: Optional[Dict[str, Type[Resource]]] = None,
    ):
        self.config = config if config is not None else load_settings()
        self.resources = dict(resources if resources is not None else RESOURCES)
        self.client: Optional[StytchClient] = None
    
    def configure(self) -> StytchClient:
        """Build the API client from the provider configuration.
        
        Raises:
            DiagnosticError: Credentials or base URL are missing or invalid
        """
        problems = self.config.validate()
        if problems:
            raise DiagnosticError("Invalid provider configuration", "\n".join(problems))
        
        self.client = StytchClient.from_config(self.config)
        logger.info(f"[provider] Configured client for {self.config.base_url}")
        return self.client
    
    def resource_types(self) -> List[str]:
        return sorted(self.resources)
    
    def resource(self, type_name: str) -> Resource:
        try:
            cls = self.resources[type_name]
        except KeyError:
            raise KeyError(
                f"Unknown resource type {type_name!r}. Known types: {', '.join(self.resource_types())}"
            ) from None
        return cls(self.client)
    
    def upgrade_resource_state(self, type_name: str, version: int, prior: Dict[str, Any]) -> Dict[str, Any]:
        """Upgrade state written at ``version`` to the current schema version.
        
        Every upgrader between ``version`` and the current version runs in
        order, each feeding the next.
        
        Raises:
            DiagnosticError: The state is newer than the schema, or an
                upgrader failed
        """
        resource = self.resource(type_name)
        current = resource.schema.version
        if version > current:
            raise DiagnosticError(
                "Unable to Upgrade Resource State",
                f"State for {type_name} has schema version {version}, newer than the supported version {current}.",
            )
        
        state = prior
        for step in range(version, current):
            state = resource.upgrade_state(step, state)
        return state
    
    def import_resource(self, type_name: str, import_id: str) -> Dict[str, Any]:
        """Import an existing object by ID and return its full state."""
        resource = self.resource(type_name)
        partial = resource.import_state(import_id)
        state = resource.read(partial)
        if state is None:
            raise DiagnosticError(
                "Cannot import non-existent remote object",
                f"No {resource.label} exists with import ID {import_id!r}.",
            )
        return state
