"""Cluster access through the kubectl CLI"""

from .base import (
    CollectorError,
    KubectlClient,
    KubectlError,
    KubectlTimeoutError,
    RBACError,
    ResourceNotFoundError,
    create_client,
)

__all__ = [
    'CollectorError',
    'KubectlClient',
    'KubectlError',
    'KubectlTimeoutError',
    'RBACError',
    'ResourceNotFoundError',
    'create_client',
]
