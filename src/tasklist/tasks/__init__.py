"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Priority, FilterMode, view state)
- task_codec.py: JSON wire format for the persisted collection
- task_views.py: pure derived views (filter, search, statistics)
- task_store.py: in-memory TaskStore with write-through persistence + listeners
"""
