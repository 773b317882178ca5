"""
API layer.

FastAPI application, routers and request dependencies.
"""
