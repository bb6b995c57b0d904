"""Go package metadata resolvers."""

from gocobertura.adapters.packages.base import ModuleInfo, PackageInfo, PackageResolver
from gocobertura.adapters.packages.go_list import GoListResolver
from gocobertura.adapters.packages.static import StaticResolver

__all__ = [
    "GoListResolver",
    "ModuleInfo",
    "PackageInfo",
    "PackageResolver",
    "StaticResolver",
]
