"""Image store adapter abstraction: pluggable object store integration."""

import os

from catalogue.domain import logger

_image_store_instance = None


def get_image_store():
    """Return the configured image store adapter (singleton).

    Uses FakeImageStore by default. Select another adapter via the
    IMAGE_STORE_ADAPTER environment variable.
    """
    global _image_store_instance
    if _image_store_instance is None:
        adapter = os.environ.get("IMAGE_STORE_ADAPTER", "fake")
        if adapter == "fake":
            from catalogue.images.fake_adapter import FakeImageStore

            _image_store_instance = FakeImageStore()
        else:
            raise ValueError(f"Unknown image store adapter: {adapter}")
    return _image_store_instance


def reset_image_store():
    """Reset the image store singleton (useful for testing)."""
    global _image_store_instance
    _image_store_instance = None


def discard_images(keys):
    """Delete each stored object, logging the ones the store would not remove."""
    store = get_image_store()
    for key in keys:
        if not store.delete(key):
            logger.warning("image_delete_failed", key=key)
