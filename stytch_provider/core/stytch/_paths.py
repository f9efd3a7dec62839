"""URL path helpers shared by the environment-scoped services."""


def project_path(project_slug: str) -> str:
    return f"/pwa/v3/projects/{project_slug}"


def environment_path(project_slug: str, environment_slug: str) -> str:
    return f"{project_path(project_slug)}/environments/{environment_slug}"
