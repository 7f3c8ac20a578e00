"""kbgraph: entity-relationship graph engine for knowledge-base wikis."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("kbgraph")
except PackageNotFoundError:
    __version__ = "dev"
