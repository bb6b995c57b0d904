"""Adapters for the external inputs of a conversion: profiles and packages."""
