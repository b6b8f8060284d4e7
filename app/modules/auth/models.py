# Supabase Auth
# This module only resolves identities; tokens are issued by Supabase Auth
# (sign-up, sign-in and password storage happen outside this service).

"""
Supabase Auth provides:
- auth.get_user(jwt) - Resolve the user behind a bearer token

User ids from auth.users are the keys used by user_profiles, projects.owner_id,
project_members.user_id and tasks.assigned_to / created_by.
"""
