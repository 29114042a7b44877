"""
Core module for shared domain infrastructure.

This module contains:
- Domain exceptions, value objects and events
- The in-process event bus and its handlers
- Middleware (auth, observability, metrics, rate limiting)
- Discord webhook delivery and background tasks
"""
