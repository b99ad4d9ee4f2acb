"""Infrastructure — database sessions, lookup tables, logging.

Invariants:
    - Implements the Protocols declared in core/repository_protocols.py
    - Everything here is initialized once in the FastAPI lifespan
"""
