"""
Task subsystem.

Components:
- task_models.py: data structures (Task, UserProfile, EditDraft, SortDirection)
- task_list.py: local task cache reconciled with the remote Task Store
"""
