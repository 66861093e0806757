# 📄 File: chatter/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Common tools every part of Chatter can use, like settings, error types, logging and the database helpers.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package for configuration, core exceptions and security, logging utilities
# and MongoDB infrastructure.

"""
Shared Kernel - Common Utilities and Infrastructure

- Configuration management
- Exception hierarchy and password hashing
- Structured logging
- MongoDB connection, generic repository and migrations
"""
