# Supabase tables: study_guides, anonymous_study_guides, analytics_events
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

study_guides (signed-in users):
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users)
- input_type: text (not null) - values: scripture, topic
- input_value: text (not null)
- study_mode: text (not null, default: 'standard') - values: quick, standard, deep, lectio, sermon
- summary: text (not null)
- interpretation: text (not null)
- context: text (not null)
- related_verses: text[] (not null)
- reflection_questions: text[] (not null)
- prayer_points: text[] (not null)
- language: text (not null, default: 'en') - values: en, hi, ml
- is_saved: boolean (default: false)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

anonymous_study_guides (anonymous sessions):
- same columns as study_guides except
- session_id: uuid (foreign key to anonymous_sessions.session_id) instead of user_id
- input_value_hash: text (sha256 of the input) instead of input_value

analytics_events:
- id: uuid (primary key)
- event_type: text (not null) - e.g. study_guide_generated, study_guide_cache_hit, security_violation
- event_data: jsonb
- user_id: uuid (nullable)
- session_id: text (nullable)
- ip_address: inet (nullable)
- user_agent: text (nullable)
- created_at: timestamp (default: now())

Row Level Security restricts study guide rows to their owner; the API runs
with the caller's session, so owner filters below are also applied explicitly.
"""
