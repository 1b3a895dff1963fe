"""Import all models here so metadata.create_all sees every table."""

from gallery.db.base_class import Base
from gallery.models import association, group, image, tag  # noqa: F401

__all__ = ["Base"]
