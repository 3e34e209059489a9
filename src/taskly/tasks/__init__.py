"""
Task subsystem.

Components:
- task_models.py: data structures (TaskItem, ActivityType)
- validation.py: pydantic schema + field-level validation
- storage.py: key/value slots (JSON file, SQLite, memory)
- task_store.py: in-memory list with write-through persistence
"""
