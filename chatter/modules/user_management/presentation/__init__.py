"""
User Management Presentation Layer

REST endpoints for cookie sessions and the GraphQL API for user accounts.
"""
