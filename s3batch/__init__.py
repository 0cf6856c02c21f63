from importlib.metadata import PackageNotFoundError, version as _pkg_version

try:
    __version__ = _pkg_version("s3batch")
except PackageNotFoundError:
    __version__ = "0.1.0"
