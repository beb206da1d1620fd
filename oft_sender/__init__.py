"""Top-level package for submitting LayerZero OFT transfers."""

from importlib import metadata


def __getattr__(name: str) -> str:
    """Expose the package version via ``oft_sender.__version__``."""
    if name == "__version__":
        try:
            return metadata.version("oft-sender")
        except metadata.PackageNotFoundError:
            return "0.0.0"
    raise AttributeError(name)


__all__ = ["__version__"]
