"""
Infrastructure layer - SQLAlchemy adapters.
"""
