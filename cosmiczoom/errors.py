class CosmicZoomError(Exception):
    """Base class for errors raised by cosmiczoom."""


class ConfigError(CosmicZoomError, ValueError):
    pass


class SurfaceError(CosmicZoomError):
    pass


class AudioError(CosmicZoomError):
    pass
