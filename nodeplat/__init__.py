"""nodeplat — platform layer for edge-device component isolation."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("nodeplat")
except PackageNotFoundError:
    __version__ = "0.1.0"  # fallback for development
