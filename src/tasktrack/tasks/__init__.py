"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, State) and timestamp helpers
- task_store.py: JSON file storage for the whole State document
"""
