"""Pokebin — team paste storage and rendering service.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
