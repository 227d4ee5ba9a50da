"""Image store port: abstract interface for the object store holding product pictures.

Uploads happen outside the backend (clients send the resulting ``{url, key}``
pairs); the backend only removes objects it no longer references.
"""

from abc import ABC, abstractmethod


class ImageStorePort(ABC):
    """Abstract interface for image store adapters."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete the object stored under ``key``.

        Returns:
            True if the object was removed, False if the store refused or
            did not hold it.
        """
        ...
