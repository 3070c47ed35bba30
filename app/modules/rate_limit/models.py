# Supabase table: rate_limit_usage
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- identifier: text (not null) - user id for authenticated callers, session id for anonymous
- user_type: text (not null) - values: anonymous, authenticated
- window_start: timestamptz (not null) - start of the fixed window the count belongs to
- count: integer (not null, default: 0)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
- unique (identifier, user_type, window_start)

Expected RPC:
- increment_rate_limit_usage(p_identifier text, p_user_type text, p_window_start timestamptz)
  upserts the row and increments count atomically
"""
