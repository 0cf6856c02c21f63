from enum import Enum
from typing import Any

from s3batch.errors import S3BatchError


class UnknownShapeError(S3BatchError):
    pass


class ParamShape(Enum):
    """What kind of token an argument is. Determines how arguments are validated."""

    UNCHECKED = "unchecked"  # arbitrary single parameter
    UNCHECKED_ONE_OR_MORE = "unchecked_one_or_more"  # one or more arbitrary parameters
    S3_OBJ = "s3_obj"  # bucket or bucket + key
    S3_DIR = "s3_dir"  # bucket or bucket + key + "/" (prefix)
    S3_OBJ_OR_DIR = "s3_obj_or_dir"  # bucket or bucket + key [+ "/"]
    S3_WILD_OBJ = "s3_wild_obj"  # bucket + key with wildcard
    FILE_OBJ = "file_obj"  # filename
    DIR = "dir"  # dir name or non-existing name ("/" appended)
    FILE_OR_DIR = "file_or_dir"  # file or directory (if existing directory, "/" appended)
    GLOB = "glob"  # local glob pattern

    @property
    def label(self) -> str:
        return shape_label(self)

    @property
    def is_unchecked(self) -> bool:
        return self in (ParamShape.UNCHECKED, ParamShape.UNCHECKED_ONE_OR_MORE)

    @classmethod
    def parse(cls, text: str) -> "ParamShape":
        """Accepts an enum name (file_obj, S3_OBJ) or a display label (filename)."""
        needle = (text or "").strip()
        for shape in cls:
            if needle.lower() == shape.value or needle == _LABELS[shape]:
                return shape
        raise UnknownShapeError(f"unknown parameter shape: {text!r}")


_LABELS = {
    ParamShape.UNCHECKED: "param",
    ParamShape.UNCHECKED_ONE_OR_MORE: "param...",
    ParamShape.S3_OBJ: "s3://bucket[/object]",
    ParamShape.S3_DIR: "s3://bucket[/object]/",
    ParamShape.S3_OBJ_OR_DIR: "s3://bucket[/object[/]]",
    ParamShape.S3_WILD_OBJ: "s3://bucket/wild/*/obj*",
    ParamShape.FILE_OBJ: "filename",
    ParamShape.DIR: "directory",
    ParamShape.FILE_OR_DIR: "file-or-directory",
    ParamShape.GLOB: "glob-pattern*",
}

UNKNOWN_LABEL = "unknown"


def shape_label(shape: Any) -> str:
    if not isinstance(shape, ParamShape):
        return UNKNOWN_LABEL
    return _LABELS.get(shape, UNKNOWN_LABEL)
