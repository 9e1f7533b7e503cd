"""
Test suite for the to-do API.

This package contains:
- unit/: use cases, security, validation and helpers without HTTP
- integration/: endpoint tests through the Flask test client, plus store tests
- contracts/: response payloads checked against the OpenAPI contract
"""
