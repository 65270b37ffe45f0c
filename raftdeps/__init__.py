"""raftdeps - native dependency management for raft build projects.

This package fetches third-party dependency source from version control,
applies patches, and builds/installs it into a project-local prefix.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
