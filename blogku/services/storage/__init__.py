from blogku.services.storage.base import ImageStorage
from blogku.services.storage.local import LocalImageStorage

__all__ = ["ImageStorage", "LocalImageStorage"]
