"""
auth — User authentication module.

Provides:
  • Signed, time-limited identity tokens
  • Password hashing (bcrypt, per-hash salt)
  • Signup / Login API routes
  • ``get_current_user_id`` FastAPI dependency
  • ``sanitize_user`` public view of a user record
"""
