"""
Routes package for the to-do API.

This package contains the route blueprint:
- api: JSON endpoints for authentication and task management
"""
