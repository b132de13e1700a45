"""
Task subsystem.

Components:
- task_models.py: data structures (TaskEntry, TaskInfo, ScheduleOptions, IntervalUnit)
- intervals.py: symbolic unit table and interval resolution
- task_scheduler.py: the Scheduler registry and its per-task timers
- builtin_jobs.py: small ready-made actions used by the CLI
"""
