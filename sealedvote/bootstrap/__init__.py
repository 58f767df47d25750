"""Composition root for wiring dependencies.

This package centralizes infrastructure-aware wiring so the application
layer can depend on ports without importing infrastructure directly.
"""

from sealedvote.bootstrap.local_session import (
    DEFAULT_LOCAL_CONTRACT_ID,
    LocalDeployment,
    create_local_session,
)

__all__ = ["DEFAULT_LOCAL_CONTRACT_ID", "LocalDeployment", "create_local_session"]
