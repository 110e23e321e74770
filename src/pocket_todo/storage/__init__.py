"""
Durable storage.

Components:
- kv_store.py: SQLite-backed key-value slots (the durable slot for the task list)
"""
