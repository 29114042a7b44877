"""
Model registry for the accounts app.
"""
from accounts.infrastructure.models import User  # noqa: F401
