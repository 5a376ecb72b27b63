"""Domain layer - task statuses, actors, and field rules.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
