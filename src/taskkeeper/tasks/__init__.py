"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, TaskSize) and the status transition
- task_store.py: JSON-file storage + query helpers
"""
