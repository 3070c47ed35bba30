# Supabase table: feedback
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

feedback:
- id: uuid (primary key)
- study_guide_id: uuid (nullable) - study_guides.id or anonymous_study_guides.id
- jeff_reed_session_id: uuid (nullable, foreign key to jeff_reed_sessions.id)
- user_id: uuid (nullable, foreign key to auth.users)
- session_id: text (nullable) - anonymous session that left the feedback
- was_helpful: boolean (not null)
- message: text (nullable, max 1000 chars, sanitized)
- category: text (not null, default: 'general') - values: general, content, usability, technical, suggestion
- sentiment_score: real (nullable) - 0.3 negative, 0.5 neutral, 0.7 positive
- created_at: timestamp (default: now())

At least one of study_guide_id / jeff_reed_session_id is set.
"""
