"""Service layer — dispatch and loader orchestration.

Services may import from domain, infrastructure, config, and plugins.
They must never import from commands or output.
"""
