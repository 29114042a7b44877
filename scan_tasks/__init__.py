"""
Scan tasks module.

Stores the metadata of scan tasks a user configures in the dashboard.
Nothing here executes a task.
"""
