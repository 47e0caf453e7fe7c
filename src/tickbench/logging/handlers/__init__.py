from .base import BaseLogHandler as BaseLogHandler
from .file import FileLogHandler as FileLogHandler

__all__ = [
    "BaseLogHandler",
    "FileLogHandler",
]
