# Supabase table: user_tokens, token_usage_history
# This file documents the expected database schema
# Actual operations are handled via Supabase RPCs called from service.py

"""
Expected Supabase table structure for user_tokens:
- id: uuid (primary key)
- identifier: text (not null, unique with user_plan) - user id
- user_plan: text (not null) - values: free, standard, plus, premium
- available_tokens: integer (not null) - daily allocation left, reset once per day
- purchased_tokens: integer (not null, default: 0) - never reset, consumed first
- daily_limit: integer (not null)
- last_reset: date (not null)
- total_consumed_today: integer (default: 0)
- created_at / updated_at: timestamp

Expected RPCs:
- get_or_create_user_tokens(p_identifier, p_user_plan)
  -> available_tokens, purchased_tokens, daily_limit, last_reset, total_consumed_today
- consume_user_tokens(p_identifier, p_user_plan, p_token_cost)
  -> success, available_tokens, purchased_tokens, daily_limit, error_message
- add_purchased_tokens(p_identifier, p_user_plan, p_token_amount)
  -> success, new_purchased_balance, error_message
- log_token_event(p_user_id, p_event_type, p_event_data jsonb, p_session_id)
  inserts into token_usage_history
"""
