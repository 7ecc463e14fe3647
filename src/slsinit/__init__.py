"""slsinit: interactive setup wizard for new Serverless Framework projects."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("slsinit")
except PackageNotFoundError:
    __version__ = "0.0.0"
