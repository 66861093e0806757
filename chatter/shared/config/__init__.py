# 📄 File: chatter/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Contains the settings that tell Chatter how to reach its database,
# how long login sessions last, and how chatty the logs should be.
#
# 🧪 Purpose (Technical Summary):
# Configuration package initialization exporting the settings model and its cached factory.
#
# 🔄 Connected Modules / Calls From:
# - chatter.main (application startup)
# - All modules requiring configuration

"""
Configuration Management Package

Handles all application configuration including:
- Environment-based settings
- MongoDB connection and migration configuration
- Session token and password hashing settings
"""

from .settings import get_settings, Settings

__all__ = [
    "get_settings",
    "Settings",
]
