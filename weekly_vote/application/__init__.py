"""
Application layer.

Use-case orchestration over the core domain and the database boundary.
"""
