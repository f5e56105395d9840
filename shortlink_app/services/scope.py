"""
Endpoint scopes.

A short endpoint lives either in the root namespace or inside one
category. ``scoped_endpoint`` is the only place a storage key is built.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class RootScope:
    pass


@dataclass(frozen=True)
class CategoryScope:
    name: str


Scope = Union[RootScope, CategoryScope]

ROOT = RootScope()


def scope_for(category: Optional[str]) -> Scope:
    """Map an optional category name to a scope (None -> root)"""
    if category is None:
        return ROOT
    return CategoryScope(category)


def scoped_endpoint(scope: Scope, alias: str) -> str:
    """Build the storage key for ``alias`` inside ``scope``."""
    if isinstance(scope, CategoryScope):
        return f"{scope.name}/{alias}"
    return alias


def category_name(scope: Scope) -> Optional[str]:
    if isinstance(scope, CategoryScope):
        return scope.name
    return None
