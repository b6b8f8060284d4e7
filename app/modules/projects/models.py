# Supabase tables: projects, project_members
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

projects:
- id: uuid (primary key)
- name: text (not null)
- description: text (nullable)
- owner_id: uuid (foreign key to user_profiles.id, not null) - fixed at creation
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

project_members:
- id: uuid (primary key)
- project_id: uuid (foreign key to projects.id, not null)
- user_id: uuid (foreign key to user_profiles.id, not null)
- role: text (not null, default: 'member') - values: admin, member, viewer
- project_role_id: uuid (foreign key to project_roles.id, nullable, on delete set null)
- created_at: timestamp (default: now())
- unique constraint on (project_id, user_id)

The owner never has a project_members row; ownership is projects.owner_id.
"""
