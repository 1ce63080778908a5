"""pbcgen - Schema-driven C source generator in the protobuf-c style."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pbcgen")
except PackageNotFoundError:
    __version__ = "(local)"
