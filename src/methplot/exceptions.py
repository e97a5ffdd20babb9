"""Exception types raised by methplot."""


class MethplotError(Exception):
    """Base class for methplot errors."""


class ConfigurationError(MethplotError, ValueError):
    """Unsupported reference genome or invalid plot configuration."""


class InputShapeError(MethplotError, ValueError):
    """Site, region, enhancer or group input in a shape that cannot be used."""
