"""
Admin authentication for the presale API.

Design goals:
- Single admin, bootstrapped from process configuration (no self-registration).
- Stateless bearer tokens (JWT) with a fixed one hour lifetime.
- Password hashes only ever leave bcrypt; plain passwords are never stored or logged.
"""
