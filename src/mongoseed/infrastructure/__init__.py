"""Infrastructure layer — filesystem traversal and service handles.

This layer may import from the domain layer and third-party libs
(testcontainers, docker). It must never import from services, commands,
or config.
"""
