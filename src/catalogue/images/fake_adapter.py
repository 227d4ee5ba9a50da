"""Fake image store: records deletions in memory for tests and development."""

from catalogue.images.port import ImageStorePort


class FakeImageStore(ImageStorePort):
    """Image store that accepts every deletion by default."""

    def __init__(self):
        self.deleted_keys = []
        self.should_succeed = True

    def configure(self, should_succeed: bool = True):
        """Configure the fake store behavior for testing."""
        self.should_succeed = should_succeed

    def delete(self, key: str) -> bool:
        if not self.should_succeed:
            return False
        self.deleted_keys.append(key)
        return True
