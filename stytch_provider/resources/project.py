"""stytch_project: a project in the workspace."""
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from ..core.plan_modifiers import requires_replace, use_state_for_unknown
from ..core.schema import Attribute, Schema, known
from ..core.stytch import ProjectService, VERTICALS
from ..core.validators import one_of
from .base import Resource, api_call, fetch_or_none, timestamp

logger = logging.getLogger(__name__)


class ProjectResource(Resource):
    """Manages a project within your Stytch workspace."""
    
    type_name = "stytch_project"
    schema = Schema(
        version=1,
        description="Manages a project within your Stytch workspace.",
        attributes=[
            Attribute("id", computed=True, plan_modifiers=[use_state_for_unknown]),
            Attribute(
                "project_slug",
                optional=True,
                computed=True,
                plan_modifiers=[use_state_for_unknown, requires_replace],
                description="The immutable slug of the project. Generated when not set.",
            ),
            Attribute("name", required=True, description="The project's name."),
            Attribute(
                "vertical",
                required=True,
                validators=[one_of(*VERTICALS)],
                plan_modifiers=[requires_replace],
                description="The project's vertical. This cannot be changed after creation.",
            ),
            Attribute("created_at", computed=True, plan_modifiers=[use_state_for_unknown]),
            Attribute("last_updated", computed=True),
        ],
    )
    
    @property
    def projects(self) -> ProjectService:
        return ProjectService(self.client)
    
    @staticmethod
    def _from_api(project: Dict[str, Any], last_updated: Optional[str]) -> Dict[str, Any]:
        return {
            "id": project["project_slug"],
            "project_slug": project["project_slug"],
            "name": project.get("name", ""),
            "vertical": project.get("vertical", ""),
            "created_at": project.get("created_at", ""),
            "last_updated": last_updated,
        }
    
    def create(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(f"[project] Creating project name={plan['name']} vertical={plan['vertical']}")
        with api_call("Failed to create project"):
            project = self.projects.create(plan["name"], plan["vertical"], known(plan.get("project_slug")))
        logger.info(f"[project] Created project {project['project_slug']}")
        return self._from_api(project, timestamp())
    
    def read(self, state: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        project_slug = state["project_slug"]
        logger.info(f"[project] Reading project {project_slug}")
        project = fetch_or_none("Failed to get project", self.projects.get, project_slug)
        if project is None:
            logger.warning(f"[project] Project {project_slug} no longer exists")
            return None
        return self._from_api(project, state.get("last_updated"))
    
    def update(self, plan: Dict[str, Any], state: Dict[str, Any]) -> Dict[str, Any]:
        project_slug = state["project_slug"]
        logger.info(f"[project] Updating project {project_slug}")
        with api_call("Failed to update project"):
            project = self.projects.update(project_slug, plan["name"])
        return self._from_api(project, timestamp())
    
    def delete(self, state: Dict[str, Any]) -> None:
        logger.info(f"[project] Deleting project {state['project_slug']}")
        with api_call("Failed to delete project"):
            self.projects.delete(state["project_slug"])
    
    def import_state(self, import_id: str) -> Dict[str, Any]:
        logger.info(f"[project] Importing project {import_id}")
        return {"id": import_id, "project_slug": import_id}
    
    def state_upgraders(self):
        return {0: self._upgrade_v0}
    
    def _upgrade_v0(self, prior: Dict[str, Any]) -> Dict[str, Any]:
        """v0 state is keyed by the live project ID; v1 by the project slug."""
        legacy = self.resolver().resolve_project(prior.get("live_project_id") or "")
        with api_call("Failed to retrieve project"):
            project = self.projects.get(legacy.project_slug)
        return self._from_api(project, timestamp())
