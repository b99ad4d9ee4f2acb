"""Request Dependencies — hand the startup-built collaborators to route handlers.

Invariants:
    - SetBuilder and ImageResolver are created once in the lifespan and stored on
      app.state; handlers never build them per request
    - Missing state means startup did not run: fail loudly, never rebuild lazily

Design Decisions:
    - app.state over module globals: tests swap collaborators with
      app.dependency_overrides instead of monkeypatching modules
"""

from fastapi import Request

from pokebin.core.repository_protocols import ImageResolver
from pokebin.core.set_builder import SetBuilder


def get_set_builder(request: Request) -> SetBuilder:
    builder = getattr(request.app.state, "set_builder", None)
    if builder is None:
        raise RuntimeError("Lookup tables not loaded")
    return builder


def get_image_resolver(request: Request) -> ImageResolver:
    resolver = getattr(request.app.state, "image_resolver", None)
    if resolver is None:
        raise RuntimeError("Lookup tables not loaded")
    return resolver
