# Supabase table: project_roles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

project_roles:
- id: uuid (primary key)
- project_id: uuid (foreign key to projects.id, not null)
- name: text (not null) - e.g., "Scrum Master", "QA Engineer"
- description: text (nullable)
- permission_level: text (not null) - values: full, edit, comment, view (descriptive only)
- can_manage_members: boolean (default: false)
- can_manage_roles: boolean (default: false)
- can_assign_tasks: boolean (default: false)
- can_delete_tasks: boolean (default: false)
- can_manage_project: boolean (default: false)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
- unique constraint on (project_id, name)

project_members.project_role_id references project_roles.id with
ON DELETE SET NULL; the service also clears it explicitly before deleting.
"""
