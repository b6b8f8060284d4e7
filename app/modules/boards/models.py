# Supabase table: boards
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

boards:
- id: uuid (primary key)
- project_id: uuid (foreign key to projects.id, not null)
- name: text (not null)
- position: integer (not null, default: 0) - column order within the project
- created_at: timestamp (default: now())
"""
