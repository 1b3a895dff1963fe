from gallery.models.association import GroupTag, ImageGroup, ImageTag
from gallery.models.group import Group
from gallery.models.image import Image
from gallery.models.tag import Tag

__all__ = [
    "Group",
    "GroupTag",
    "Image",
    "ImageGroup",
    "ImageTag",
    "Tag",
]
"""SQLAlchemy ORM models for the Gallery API."""
