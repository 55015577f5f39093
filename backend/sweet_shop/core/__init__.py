# Core package: configuration, security, logging and HTTP helpers.
# Submodules that reach into domain or services are imported directly.

from . import exceptions

__all__ = ["exceptions"]
