"""
Remote API access.

Components:
- client.py: shared httpx client, bearer credential, ApiError
- auth_api.py: Auth Gateway endpoints (/api/users...)
- task_api.py: Task Store endpoints (/api/tasks...)
"""
