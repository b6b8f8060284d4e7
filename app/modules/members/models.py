# Supabase table: project_members (schema documented in modules/projects/models.py)
# Actual operations are handled via Supabase SDK in service.py

"""
Member listings join project_members with user_profiles and project_roles.
The owner is listed first with role "owner" and no membership id, since it
has no project_members row.
"""
