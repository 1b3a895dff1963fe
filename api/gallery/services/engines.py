"""Per-entity descriptors, query engines, and CRUD controllers.

Each engine receives the association tables it joins through explicitly;
there is no shared registry that models mutate at import time.
"""

from __future__ import annotations

from gallery.models import Group, GroupTag, Image, ImageGroup, ImageTag, Tag
from gallery.query.sorting import SortDirection, SortKey
from gallery.schema.association import (
    GroupTagCreate,
    GroupTagRead,
    ImageGroupCreate,
    ImageGroupRead,
    ImageTagCreate,
    ImageTagRead,
)
from gallery.schema.group import GroupCreate, GroupRead, GroupUpdate
from gallery.schema.image import ImageCreate, ImageRead, ImageUpdate
from gallery.schema.tag import TagCreate, TagRead, TagUpdate
from gallery.services.crud_controller import CrudController
from gallery.services.entity_engine import (
    Association,
    EntityDescriptor,
    EntityQueryEngine,
    build_descriptor_fields,
)

TIMESTAMP_FIELDS = (("createdAt", "created_at"), ("updatedAt", "updated_at"))

IMAGE_DESCRIPTOR = EntityDescriptor(
    model=Image,
    label="Image",
    plural="images",
    fields=build_descriptor_fields(
        (
            ("thumbnailUrl", "thumbnail_url"),
            ("imageUrl", "image_url"),
            ("title", "title"),
            ("description", "description"),
            ("location", "location"),
            ("width", "width"),
            ("height", "height"),
            ("captureDate", "capture_date"),
            *TIMESTAMP_FIELDS,
        )
    ),
    filter_fields=("thumbnailUrl", "imageUrl", "title", "description", "location", "captureDate"),
    default_sort=SortKey("captureDate", SortDirection.DESC),
    associations={
        "groups": Association(ImageGroup, local_key="image_id", remote_key="group_id", related_label="Group"),
        "tags": Association(ImageTag, local_key="image_id", remote_key="tag_id", related_label="Tag"),
    },
)

GROUP_DESCRIPTOR = EntityDescriptor(
    model=Group,
    label="Group",
    plural="groups",
    fields=build_descriptor_fields(
        (
            ("thumbnailUrl", "thumbnail_url"),
            ("imageUrl", "image_url"),
            ("title", "title"),
            ("description", "description"),
            *TIMESTAMP_FIELDS,
        )
    ),
    filter_fields=("thumbnailUrl", "imageUrl", "title", "description"),
    default_sort=SortKey("title", SortDirection.ASC),
    associations={
        "images": Association(ImageGroup, local_key="group_id", remote_key="image_id", related_label="Image"),
        "tags": Association(GroupTag, local_key="group_id", remote_key="tag_id", related_label="Tag"),
    },
)

TAG_DESCRIPTOR = EntityDescriptor(
    model=Tag,
    label="Tag",
    plural="tags",
    fields=build_descriptor_fields((("name", "name"), ("description", "description"), *TIMESTAMP_FIELDS)),
    filter_fields=("name", "description"),
    pattern_fields=("description",),
    default_sort=SortKey("name", SortDirection.ASC),
    tiebreak="name",
    associations={
        "images": Association(ImageTag, local_key="tag_id", remote_key="image_id", related_label="Image"),
        "groups": Association(GroupTag, local_key="tag_id", remote_key="group_id", related_label="Group"),
    },
)


def _join_descriptor(model, label: str, plural: str, left: tuple[str, str], right: tuple[str, str]) -> EntityDescriptor:
    return EntityDescriptor(
        model=model,
        label=label,
        plural=plural,
        fields=build_descriptor_fields((left, right)),
        filter_fields=(left[0], right[0]),
        default_sort=SortKey("id", SortDirection.ASC),
        tiebreak="id",
    )


IMAGE_GROUP_DESCRIPTOR = _join_descriptor(
    ImageGroup, "imageGroup", "imageGroups", ("imageId", "image_id"), ("groupId", "group_id")
)
IMAGE_TAG_DESCRIPTOR = _join_descriptor(
    ImageTag, "imageTag", "imageTags", ("imageId", "image_id"), ("tagId", "tag_id")
)
GROUP_TAG_DESCRIPTOR = _join_descriptor(
    GroupTag, "groupTag", "groupTags", ("groupId", "group_id"), ("tagId", "tag_id")
)

image_engine: EntityQueryEngine[Image] = EntityQueryEngine(IMAGE_DESCRIPTOR)
group_engine: EntityQueryEngine[Group] = EntityQueryEngine(GROUP_DESCRIPTOR)
tag_engine: EntityQueryEngine[Tag] = EntityQueryEngine(TAG_DESCRIPTOR)
image_group_engine: EntityQueryEngine[ImageGroup] = EntityQueryEngine(IMAGE_GROUP_DESCRIPTOR)
image_tag_engine: EntityQueryEngine[ImageTag] = EntityQueryEngine(IMAGE_TAG_DESCRIPTOR)
group_tag_engine: EntityQueryEngine[GroupTag] = EntityQueryEngine(GROUP_TAG_DESCRIPTOR)

image_controller = CrudController(image_engine, ImageRead, ImageCreate, ImageUpdate)
group_controller = CrudController(group_engine, GroupRead, GroupCreate, GroupUpdate)
tag_controller = CrudController(tag_engine, TagRead, TagCreate, TagUpdate)
image_group_controller = CrudController(image_group_engine, ImageGroupRead, ImageGroupCreate)
image_tag_controller = CrudController(image_tag_engine, ImageTagRead, ImageTagCreate)
group_tag_controller = CrudController(group_tag_engine, GroupTagRead, GroupTagCreate)
