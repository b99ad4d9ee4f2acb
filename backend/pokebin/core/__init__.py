"""Core Layer — record codec, paste grammar, set builder. No IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Lookups reach the core only through repository_protocols
"""
