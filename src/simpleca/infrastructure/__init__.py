"""
Infrastructure abstraction layer for storage operations.

This module provides repository interfaces and implementations for:
- Root CA key pair storage
- Leaf certificate registry document
- Leaf artifact files (certificate, key, full chain)

Providers are selected via factory pattern:
- local: Files in the managed storage directory
"""

from simpleca.infrastructure.factory import InfrastructureFactory

__all__ = ["InfrastructureFactory"]
