"""
Model registry for the scan_tasks app.
"""
from scan_tasks.infrastructure.models import ScanTask  # noqa: F401
