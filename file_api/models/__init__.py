from file_api.models.file import File  # noqa: F401
from file_api.models.folder import Folder  # noqa: F401

__all__ = ["File", "Folder"]
