"""RemoteCode utility helpers: platform paths and socket connectivity."""

from .net import can_connect
from .paths import AppPaths, app_paths, human_path

__all__ = ["AppPaths", "app_paths", "can_connect", "human_path"]
