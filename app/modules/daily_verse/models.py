# Supabase table: daily_verses_cache
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

daily_verses_cache:
- id: uuid (primary key)
- date_key: text (unique, not null) - YYYY-MM-DD
- verse_data: jsonb (not null) - {reference, reference_translations, translations: {esv, hi, ml}, date}
- is_active: boolean (default: true)
- created_at: timestamp (default: now())
- expires_at: timestamp (not null) - created_at + DAILY_VERSE_CACHE_DAYS

Rows are written by the API and by the pre-generation scheduler with the
service role key; expired rows are removed by the scheduler.
"""
