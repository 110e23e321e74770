"""
Task subsystem.

Components:
- task_models.py: data structures (Task, EditSession)
- snapshot.py: JSON codec for the durable slot
- task_store.py: in-memory ordered list + fire-and-forget persistence
"""
