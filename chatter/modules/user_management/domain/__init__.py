"""
User Management Domain Layer

- models: the User entity and its storage/API mappings
- services: account CRUD and cookie session management
"""
