"""API routes and the table of auth requirements each route is registered with."""

from fastapi import APIRouter

from app.api.v1 import auth, health, impacts, management, profiles, projects, sdgs, users
from app.core.access import AuthRequirement

NONE = AuthRequirement.NONE
AUTHENTICATED = AuthRequirement.AUTHENTICATED
ADMIN_ONLY = AuthRequirement.ADMIN_ONLY

# (method, path) -> requirement. Every route must declare exactly the requirement
# listed here through app.api.v1.auth.require; tests check the two agree.
ROUTE_REQUIREMENTS: dict[tuple[str, str], AuthRequirement] = {
    ("GET", "/health"): NONE,
    ("POST", "/auth/register"): NONE,
    ("POST", "/auth/login"): NONE,
    ("POST", "/users/admin/create"): NONE,
    ("PUT", "/users/email"): AUTHENTICATED,
    ("GET", "/users/admin/all"): ADMIN_ONLY,
    ("DELETE", "/users/admin/delete-all-non-admin"): ADMIN_ONLY,
    ("DELETE", "/users/admin/{user_id}"): ADMIN_ONLY,
    ("GET", "/management/registration-code"): ADMIN_ONLY,
    ("POST", "/management/registration-code"): ADMIN_ONLY,
    ("GET", "/management/master-password"): ADMIN_ONLY,
    ("POST", "/management/master-password"): ADMIN_ONLY,
    ("GET", "/projects"): AUTHENTICATED,
    ("POST", "/projects"): AUTHENTICATED,
    ("GET", "/projects/{project_id}"): AUTHENTICATED,
    ("PUT", "/projects/{project_id}"): AUTHENTICATED,
    ("DELETE", "/projects/{project_id}"): AUTHENTICATED,
    ("GET", "/projects/{project_id}/analysis"): AUTHENTICATED,
    ("GET", "/projects/{project_id}/impacts"): AUTHENTICATED,
    ("GET", "/projects/{project_id}/collaborators"): AUTHENTICATED,
    ("POST", "/projects/{project_id}/collaborators"): AUTHENTICATED,
    ("DELETE", "/projects/{project_id}/collaborators/{profile_id}"): AUTHENTICATED,
    ("GET", "/impacts"): AUTHENTICATED,
    ("POST", "/impacts"): AUTHENTICATED,
    ("GET", "/impacts/{impact_id}"): AUTHENTICATED,
    ("PUT", "/impacts/{impact_id}"): AUTHENTICATED,
    ("DELETE", "/impacts/{impact_id}"): AUTHENTICATED,
    ("GET", "/profiles/{profile_id}"): AUTHENTICATED,
    ("PUT", "/profiles/{profile_id}"): AUTHENTICATED,
    ("POST", "/profiles/{profile_id}/picture"): AUTHENTICATED,
    ("GET", "/profiles/{profile_id}/projects"): AUTHENTICATED,
    ("GET", "/profiles/{profile_id}/collaborations"): AUTHENTICATED,
    ("GET", "/sdgs"): AUTHENTICATED,
}

# (prefix, router) for each resource, in mount order.
RESOURCE_ROUTERS: tuple[tuple[str, APIRouter], ...] = (
    ("/health", health.router),
    ("/auth", auth.router),
    ("/users", users.router),
    ("/management", management.router),
    ("/projects", projects.router),
    ("/impacts", impacts.router),
    ("/profiles", profiles.router),
    ("/sdgs", sdgs.router),
)

router = APIRouter()
for prefix, resource_router in RESOURCE_ROUTERS:
    router.include_router(resource_router, prefix=prefix, tags=[prefix.strip("/")])
