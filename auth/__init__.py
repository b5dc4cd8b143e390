"""
auth — User authentication module.

Provides:
  • Access token creation & verification (HMAC-SHA256, 15 minute expiry)
  • Password hashing (bcrypt, work factor 10)
  • Register / Login / Current-user API routes
  • ``require_auth`` FastAPI dependency
"""
