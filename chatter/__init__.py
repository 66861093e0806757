# 📄 File: chatter/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the 'chatter' folder as our application package and records its version and name.
#
# 🧪 Purpose (Technical Summary):
# Application package initialization with version metadata for the Chatter FastAPI/GraphQL service.
#
# 🔄 Connected Modules / Calls From:
# - chatter/main.py (application factory)
# - chatter/shared/config/settings.py (default version)

"""
Chatter - user accounts and cookie sessions over MongoDB

A FastAPI backend exposing user management through GraphQL and
cookie-based login/logout through REST.
"""

__version__ = "1.0.0"
__title__ = "Chatter API"
__description__ = "User management and session backend for Chatter"
__license__ = "MIT"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
    "__license__",
]
