"""Go cover profile parsing."""

from gocobertura.adapters.coverage.base import Profile, ProfileBlock
from gocobertura.adapters.coverage.go_cover_adapter import GoCoverAdapter, parse_profiles

__all__ = [
    "GoCoverAdapter",
    "Profile",
    "ProfileBlock",
    "parse_profiles",
]
