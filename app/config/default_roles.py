"""
Default Project Roles Configuration
This config defines the role catalogue seeded into every new project.
Used on project creation and by the backfill script for existing projects.
"""

# Flags not listed default to False
DEFAULT_PROJECT_ROLES = [
    {
        "name": "Scrum Master",
        "description": "Facilitates Agile ceremonies and removes blockers for the team",
        "permission_level": "full",
        "can_manage_members": True,
        "can_manage_roles": True,
        "can_assign_tasks": True,
        "can_delete_tasks": True,
        "can_manage_project": True,
    },
    {
        "name": "Product Owner",
        "description": "Defines product vision and prioritizes backlog items",
        "permission_level": "full",
        "can_assign_tasks": True,
        "can_manage_project": True,
    },
    {
        "name": "Frontend Developer",
        "description": "Develops user interfaces and client-side functionality",
        "permission_level": "edit",
    },
    {
        "name": "Backend Developer",
        "description": "Develops server-side logic and database architecture",
        "permission_level": "edit",
    },
    {
        "name": "Full Stack Developer",
        "description": "Works on both frontend and backend development",
        "permission_level": "edit",
    },
    {
        "name": "QA Engineer",
        "description": "Tests and ensures quality of deliverables",
        "permission_level": "edit",
    },
    {
        "name": "DevOps Engineer",
        "description": "Manages deployment, infrastructure, and CI/CD pipelines",
        "permission_level": "edit",
    },
    {
        "name": "UI/UX Designer",
        "description": "Designs user interfaces and user experiences",
        "permission_level": "comment",
    },
]

ROLE_FLAGS = (
    "can_manage_members",
    "can_manage_roles",
    "can_assign_tasks",
    "can_delete_tasks",
    "can_manage_project",
)


def get_default_roles():
    """Default roles with every flag filled in"""
    roles = []
    for role in DEFAULT_PROJECT_ROLES:
        row = {
            "name": role["name"],
            "description": role["description"],
            "permission_level": role["permission_level"],
        }
        for flag in ROLE_FLAGS:
            row[flag] = role.get(flag, False)
        roles.append(row)
    return roles
