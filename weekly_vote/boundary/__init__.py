"""
Boundary layer for external system integrations.

Holds the database adapter for vote sessions.
"""
