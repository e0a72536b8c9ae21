"""Exception types raised by the track generator."""


class TrackGenError(Exception):
    """Base error for everything raised by trackgen."""


class DegenerateVectorError(TrackGenError, ValueError):
    """A direction was requested for a zero-length vector."""


class DegenerateLineError(DegenerateVectorError):
    """A segment line was requested between two identical points."""


class TemplateLoadError(TrackGenError):
    """The track template could not be read or parsed."""


class TrackWriteError(TrackGenError):
    """A track file or its folder could not be written."""


class TrackReadError(TrackGenError):
    """A saved track file could not be read back."""


class PresetNotFoundError(TrackGenError, LookupError):
    """No preset matches the requested number or name."""


class ConfigError(TrackGenError):
    """A TRACKGEN_* setting has a value that can't be used."""
