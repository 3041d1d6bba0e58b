"""Exceptions raised at the caller-facing seams of the engine.

The engine itself degrades bad item data to "no effect"; these are only
raised for I/O the caller asked for explicitly.
"""


class GearEffectsError(Exception):
    """Base class for gear_effects errors."""


class CollectionLoadError(GearEffectsError):
    """An item collection file could not be read or decoded."""
