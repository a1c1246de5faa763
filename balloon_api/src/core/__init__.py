"""
Core application utilities.

This package provides:
- Application-level settings (separate from DB settings)
- Logging configuration with request context
- Password hashing and JWT helpers
- FastAPI dependencies (current user, role checks)
- Domain exceptions
"""
