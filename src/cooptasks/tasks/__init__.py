"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Event, ResumeResult, TaskStatus)
- task_group.py: the scheduler that drives tasks against incoming events
- task_api.py: small helpers used inside task bodies (sleep, pull_event)
"""
