"""
Domain layer - entities and exceptions with no persistence dependencies.
"""
