"""
API test package for the to-do service.

Tests use the Flask test client and a per-test database and cover:
- Authentication and the bearer guard
- Task CRUD and status toggling
- Input validation and error envelopes
"""
