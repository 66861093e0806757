"""
Infrastructure layer package for Chatter.
Provides the MongoDB connection, generic repository and migration runner.
"""
