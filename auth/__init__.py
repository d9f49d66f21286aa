"""
auth: user authentication module.

Provides:
  • bcrypt password hashing
  • JWT access token signing & verification
  • Register / Login API routes
  • ``require_session`` FastAPI dependency (session cookie gate)
"""
