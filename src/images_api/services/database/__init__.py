"""
Images API Database Layer

This module contains the record store service that persists and lists
image references in the document database.
"""

from .image_service import ImageRecordService

__all__ = [
    'ImageRecordService',
]
