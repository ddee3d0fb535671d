"""
Adapters - concrete implementations of the core ports.

- database: SQLite and Supabase stores
- notifications: delivery channels for NewChirp notifications
"""
