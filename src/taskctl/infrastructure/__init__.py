"""Infrastructure layer: SQLite storage behind the store ports.

This layer depends on stdlib and third-party libs (SQLAlchemy).
It must never import from services, commands, or output.
"""
