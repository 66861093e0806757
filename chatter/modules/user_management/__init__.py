# 📄 File: chatter/modules/user_management/__init__.py
# 🧭 Purpose (Layman Explanation):
# Groups everything about user accounts and logging in: what a user is, the rules for
# managing accounts, where they are stored, and the web and GraphQL endpoints.
# 🧪 Purpose (Technical Summary):
# User management module laid out in domain / infrastructure / presentation layers.
# 🔄 Connected Modules / Calls From:
# chatter.main (router inclusion)

"""
User Management Module

- Domain: User entity, UsersService, AuthService
- Infrastructure: users collection binding for the generic repository
- Presentation: REST /auth endpoints and the GraphQL users API
"""

__module_name__ = "user_management"
