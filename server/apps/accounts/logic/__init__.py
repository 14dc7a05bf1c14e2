"""Business logic layer for accounts app.

This package covers everything between a raw credential and an
authenticated caller identity:
- Basic credential decoding
- Password hashing and verification
- Session token storage with expiry
- Request access control
- User registration and sign-in
"""
