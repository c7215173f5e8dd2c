"""Domain layer — fixture paths, filters, and import commands.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
