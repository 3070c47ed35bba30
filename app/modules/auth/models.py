# Supabase Auth + table: anonymous_sessions
# Registered users live in Supabase's auth.users table; no custom user table is required.
# Anonymous callers get a session row so their guides and rate limits can be tracked.

"""
Supabase Auth provides:
- auth.sign_up() - Register new users (full_name and language_preference go to user_metadata)
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users

Subscription plan is read from app_metadata.plan (free | standard | plus | premium),
which only the service role can modify.

Expected Supabase table structure for anonymous_sessions:
- session_id: uuid (primary key)
- created_at: timestamp (default: now())
- last_activity: timestamp (default: now())
- expires_at: timestamp (not null) - created_at + 24 hours
- study_guides_count: integer (default: 0)
- is_migrated: boolean (default: false) - set when the session is linked to a registered user
"""
