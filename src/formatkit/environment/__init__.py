# src/formatkit/environment/__init__.py
"""
Filesystem and logging capability used by the manifest and resolution code.
"""

from formatkit.environment.base import Environment
from formatkit.environment.real import RealEnvironment
from formatkit.environment.memory import InMemoryEnvironment

__all__ = [
    "Environment",
    "RealEnvironment",
    "InMemoryEnvironment",
]
