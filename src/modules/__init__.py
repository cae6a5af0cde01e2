"""Business modules for the directory service.

Each module is self-contained with its own models, schemas, service and
routes.
"""
