from enum import Enum
from typing import Iterable, Tuple

from s3batch.options import Option, has


class Operation(Enum):
    ABORT = 1
    DOWNLOAD = 2
    BATCH_DOWNLOAD = 3
    UPLOAD = 4
    BATCH_UPLOAD = 5
    COPY = 6
    BATCH_COPY = 7
    DELETE = 8
    BATCH_DELETE = 9
    BATCH_DELETE_ACTUAL = 10  # multi-object delete, issued by the executor itself
    LIST_BUCKETS = 11
    LIST = 12
    SIZE = 13
    LOCAL_COPY = 14
    BATCH_LOCAL_COPY = 15
    LOCAL_DELETE = 16
    SHELL_EXEC = 17
    ALIAS_GET = 18  # alias for DOWNLOAD
    ALIAS_BATCH_GET = 19  # alias for BATCH_DOWNLOAD

    @property
    def is_internal(self) -> bool:
        return self is Operation.BATCH_DELETE_ACTUAL

    @property
    def is_batch(self) -> bool:
        return self in _BATCH

    @property
    def accepted_options(self) -> Tuple[Option, ...]:
        return _ACCEPTED.get(self, ())

    def accepts(self, option: Option) -> bool:
        return option in self.accepted_options

    def describe(self, options: Iterable[Option] = ()) -> str:
        move = has(options, Option.DELETE_SOURCE)
        desc = _DESCRIPTIONS.get(self)
        if desc is None:
            return "Unknown"
        if isinstance(desc, tuple):
            return desc[1] if move else desc[0]
        return desc


_BATCH = frozenset({
    Operation.BATCH_DOWNLOAD,
    Operation.BATCH_UPLOAD,
    Operation.BATCH_COPY,
    Operation.BATCH_DELETE,
    Operation.BATCH_DELETE_ACTUAL,
    Operation.BATCH_LOCAL_COPY,
    Operation.ALIAS_BATCH_GET,
})

# (copy description, move description) for operations that honor DELETE_SOURCE
_DESCRIPTIONS = {
    Operation.ABORT: "Exit program",
    Operation.DOWNLOAD: ("Download from S3", "Download from S3 and delete source objects"),
    Operation.ALIAS_GET: "Download from S3",
    Operation.BATCH_DOWNLOAD: ("Batch download from S3", "Batch download from S3 and delete source objects"),
    Operation.ALIAS_BATCH_GET: "Batch download from S3",
    Operation.UPLOAD: ("Upload to S3", "Upload to S3 and delete source files"),
    Operation.BATCH_UPLOAD: ("Batch upload to S3", "Batch upload to S3 and delete source files"),
    Operation.COPY: ("Copy S3 object", "Move S3 object"),
    Operation.BATCH_COPY: ("Batch copy S3 objects", "Batch move S3 objects"),
    Operation.DELETE: "Delete from S3",
    Operation.BATCH_DELETE: "Batch delete from S3",
    Operation.BATCH_DELETE_ACTUAL: "Multi-object delete from S3",
    Operation.LIST_BUCKETS: "List buckets",
    Operation.LIST: "List objects",
    Operation.SIZE: "Count objects and size",
    Operation.LOCAL_COPY: ("Copy local files", "Move local files"),
    Operation.BATCH_LOCAL_COPY: ("Batch copy local files", "Batch move local files"),
    Operation.LOCAL_DELETE: "Delete local files",
    Operation.SHELL_EXEC: "Arbitrary shell-execute",
}

# RR must directly precede IA, the help renderer shows them as alternatives.
_ACCEPTED = {
    Operation.DOWNLOAD: (Option.IF_NOT_EXISTS,),
    Operation.ALIAS_GET: (Option.IF_NOT_EXISTS,),
    Operation.LOCAL_COPY: (Option.IF_NOT_EXISTS,),
    Operation.BATCH_DOWNLOAD: (Option.IF_NOT_EXISTS, Option.PARENTS),
    Operation.ALIAS_BATCH_GET: (Option.IF_NOT_EXISTS, Option.PARENTS),
    Operation.BATCH_LOCAL_COPY: (Option.IF_NOT_EXISTS, Option.PARENTS, Option.RECURSIVE),
    Operation.UPLOAD: (Option.IF_NOT_EXISTS, Option.RR, Option.IA),
    Operation.COPY: (Option.IF_NOT_EXISTS, Option.RR, Option.IA),
    Operation.BATCH_UPLOAD: (Option.IF_NOT_EXISTS, Option.PARENTS, Option.RECURSIVE, Option.RR, Option.IA),
    Operation.BATCH_COPY: (Option.IF_NOT_EXISTS, Option.PARENTS, Option.RR, Option.IA),
    Operation.LIST: (Option.LIST_ETAGS, Option.HUMAN_READABLE),
    Operation.SIZE: (Option.HUMAN_READABLE,),
}
