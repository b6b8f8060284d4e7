# Supabase table: tasks
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

tasks:
- id: uuid (primary key)
- board_id: uuid (foreign key to boards.id, not null) - the project is the board's project
- title: text (not null)
- description: text (nullable)
- priority: text (not null, default: 'medium') - values: low, medium, high, urgent
- status: text (not null, default: 'todo') - values: todo, in_progress, done
- due_date: date (nullable)
- assigned_to: uuid (foreign key to user_profiles.id, nullable)
- created_by: uuid (foreign key to user_profiles.id, not null)
- position: integer (not null) - order within the board, appended on create
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""
