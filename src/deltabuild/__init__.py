"""
deltabuild - Build manylinux release wheels of the delta-rs Python bindings in Docker
"""

__version__ = "0.1.0"

from .core import BuildError, DeltaBuilder

__all__ = ["BuildError", "DeltaBuilder"]
