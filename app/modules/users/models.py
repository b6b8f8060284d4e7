# Supabase table: user_profiles
# Identity comes from Supabase Auth (auth.users); this table holds the profile
# shown in member listings and task assignments.

"""
Expected Supabase table structure:

user_profiles:
- id: uuid (primary key, references auth.users.id)
- email: text (unique, not null, stored lowercase) - used to add project members
- full_name: text (nullable)
- avatar_url: text (nullable)
- job_title: text (nullable)
- bio: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

A profile is readable by its user and by anyone sharing a project with it
(as owner or member).
"""
