"""talentgen - resilient generation orchestration for recruiting workflows."""

from talentgen.version import __version__

__all__ = ["__version__"]
