"""
Service registry contract consulted by the parameter classifier.
"""

from .core import ServiceCollection, ServiceRegistry

__all__ = ["ServiceCollection", "ServiceRegistry"]
