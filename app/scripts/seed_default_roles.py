"""
Seed Default Project Roles Script
Backfills the default role catalogue into existing projects.
Projects created through the API are seeded on creation; this covers projects
created before that, or with SEED_DEFAULT_ROLES disabled.

Usage:
    python -m app.scripts.seed_default_roles            # every project
    python -m app.scripts.seed_default_roles <id> ...   # selected projects
"""

import sys
from typing import List, Optional

from app.database.supabase_client import SupabaseClient
from app.modules.roles.service import RoleService
from supabase import Client
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def get_project_ids(supabase: Client) -> List[str]:
    result = supabase.table("projects").select("id").execute()
    return [p["id"] for p in result.data] if result.data else []


def seed_projects(supabase: Client, project_ids: Optional[List[str]] = None) -> int:
    """Seed default roles into each project. Returns the number of roles created."""
    if not project_ids:
        project_ids = get_project_ids(supabase)

    service = RoleService(supabase)
    created_count = 0
    failed = 0

    for project_id in project_ids:
        try:
            created = service.seed_default_roles(project_id)
            created_count += created
            logger.debug(f"Project {project_id}: {created} roles created")
        except Exception as e:
            failed += 1
            logger.error(f"Error seeding roles for project {project_id}: {e}")

    logger.info(f"Default roles seeded: {created_count} created across {len(project_ids)} projects ({failed} failed)")
    return created_count


def main(argv: Optional[List[str]] = None):
    """Main function to backfill default roles"""
    argv = sys.argv[1:] if argv is None else argv
    try:
        supabase = SupabaseClient.get_service_client()
        logger.info("Starting default role seeding...")
        seed_projects(supabase, argv or None)
        logger.info("Seeding completed successfully!")
    except Exception as e:
        logger.error(f"Error during seeding: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
