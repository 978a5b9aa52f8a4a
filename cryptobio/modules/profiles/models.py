# Supabase table: profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, default: gen_random_uuid())
- username: text (unique, not null) - lowercase, 3-20 chars of [a-z0-9_], public URL slug
- wallet_address: text (unique, not null) - lowercase hex, identity key, never updated
- payout_address: text (nullable) - lowercase hex, tip destination; falls back to wallet_address
- display_name: text (not null, default: '')
- bio: text (not null, default: '')
- avatar_url: text (not null, default: '')
- twitter_url: text (not null, default: '')
- tip_amounts: integer[] (not null, default: '{}') - positive USD amounts, at most three expected
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

Uniqueness on username and wallet_address is enforced by the table; the
application only ever writes lowercase values into both columns.
There is no delete path.
"""
