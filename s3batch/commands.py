"""Command table: the grammar of accepted commands.

Each entry maps a keyword and an ordered list of parameter shapes to one
Operation. Entries sharing a keyword are overloads; the first entry whose
signature matches wins, so more specific signatures are listed first.
"""
import logging
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from s3batch.errors import (
    CommandTableError,
    DuplicateCommandError,
    OptionNotAcceptedError,
    UnsupportedInvocationError,
)
from s3batch.operations import Operation
from s3batch.options import Option
from s3batch.params import ParamShape, shape_label
from s3batch.schemas import Resolution

logger = logging.getLogger(__name__)

# Operations whose help lines are fixed text instead of generated usage.
HELP_OVERRIDES = {
    Operation.ABORT: "exit [exit code]",
    Operation.SHELL_EXEC: "! command [parameters...]",
}


@dataclass(frozen=True)
class CommandEntry:
    keyword: str
    operation: Operation
    params: Tuple[ParamShape, ...] = ()
    options: FrozenSet[Option] = field(default_factory=frozenset)

    @property
    def variadic(self) -> bool:
        return bool(self.params) and self.params[-1] is ParamShape.UNCHECKED_ONE_OR_MORE

    @property
    def signature(self) -> Tuple[str, int, Tuple[ParamShape, ...]]:
        return (self.keyword, len(self.params), self.params)

    def matches(self, keyword: str, args: Sequence[AbstractSet[ParamShape]]) -> bool:
        if keyword != self.keyword:
            return False
        if self.variadic:
            if len(args) < len(self.params):
                return False
        elif len(args) != len(self.params):
            return False
        for shape, candidates in zip(self.params, args):
            if shape.is_unchecked:
                continue
            if shape not in candidates:
                return False
        return True

    def usage(self) -> str:
        s = self.keyword
        for o in self.operation.accepted_options:
            s += " [" + o.flag + "]"
        for p in self.params:
            s += " " + shape_label(p)
        # trailing space so the collapse also applies when no parameter follows
        return (s + " ").replace(" [-rr] [-ia] ", " [-rr|-ia] ").rstrip()


def _entry(keyword: str, operation: Operation, *params: ParamShape, options: Iterable[Option] = ()) -> CommandEntry:
    return CommandEntry(keyword, operation, tuple(params), frozenset(options))


class CommandTable:
    """Ordered, immutable sequence of CommandEntry, validated on construction."""

    def __init__(self, entries: Iterable[CommandEntry]):
        self._entries: Tuple[CommandEntry, ...] = tuple(entries)
        self._validate()

    def _validate(self) -> None:
        seen: Dict[Tuple[str, int, Tuple[ParamShape, ...]], int] = {}
        for i, e in enumerate(self._entries):
            if not e.keyword:
                raise CommandTableError(f"entry {i} has an empty keyword")
            if ParamShape.UNCHECKED_ONE_OR_MORE in e.params[:-1]:
                raise CommandTableError(
                    f"entry {i} ({e.keyword}): {shape_label(ParamShape.UNCHECKED_ONE_OR_MORE)} must be the last parameter"
                )
            sig = e.signature
            if sig in seen:
                raise DuplicateCommandError(
                    f"entry {i} ({e.keyword} {' '.join(shape_label(p) for p in e.params)}) duplicates entry {seen[sig]}"
                )
            seen[sig] = i

    def __iter__(self):
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> CommandEntry:
        return self._entries[index]

    @property
    def keywords(self) -> List[str]:
        out: List[str] = []
        for e in self._entries:
            if e.keyword not in out:
                out.append(e.keyword)
        return out

    def find(self, keyword: str, args: Sequence[AbstractSet[ParamShape]]) -> Optional[Tuple[int, CommandEntry]]:
        for i, e in enumerate(self._entries):
            if e.matches(keyword, args):
                return i, e
        return None

    def resolve(
        self,
        keyword: str,
        args: Sequence[AbstractSet[ParamShape]] = (),
        options: Iterable[Option] = (),
    ) -> Resolution:
        """Select the operation for a keyword and per-argument candidate shapes.

        Raises UnsupportedInvocationError when no entry matches, and
        OptionNotAcceptedError when a requested option is not accepted by the
        matched operation.
        """
        args = [frozenset(a) for a in args]
        found = self.find(keyword, args)
        if found is None:
            raise UnsupportedInvocationError(keyword, len(args))
        index, entry = found
        effective = set(entry.options)
        for o in options:
            if not entry.operation.accepts(o):
                raise OptionNotAcceptedError(keyword, entry.operation, o)
            effective.add(o)
        res = Resolution(
            keyword=keyword,
            operation=entry.operation,
            params=entry.params,
            options=frozenset(effective),
            arg_count=len(args),
            entry_index=index,
        )
        logger.debug("resolved %s/%d -> %s%s", keyword, len(args), entry.operation.name, res.flags)
        return res

    def render_help(self) -> str:
        """Grouped, sorted listing of accepted commands with their options and arguments."""
        buckets: Dict[str, List[str]] = {}
        overridden = set()
        for e in self._entries:
            if e.operation.is_internal:
                continue
            desc = e.operation.describe(e.options)
            if e.operation in HELP_OVERRIDES:
                buckets[desc] = [HELP_OVERRIDES[e.operation]]
                overridden.add(desc)
                continue
            if desc in overridden:
                continue
            buckets.setdefault(desc, []).append(e.usage())

        ret = ""
        for desc in sorted(buckets):
            ret += "  " + desc + "\n"
            for line in buckets[desc]:
                ret += "        " + line + "\n"
        return ret


F = ParamShape.FILE_OBJ
FD = ParamShape.FILE_OR_DIR
D = ParamShape.DIR
G = ParamShape.GLOB
S3 = ParamShape.S3_OBJ
S3D = ParamShape.S3_DIR
S3OD = ParamShape.S3_OBJ_OR_DIR
S3W = ParamShape.S3_WILD_OBJ
MOVE = (Option.DELETE_SOURCE,)


def _copy_entries(keyword: str, options: Sequence[Option] = ()) -> List[CommandEntry]:
    return [
        # file to file
        _entry(keyword, Operation.LOCAL_COPY, F, FD, options=options),
        _entry(keyword, Operation.BATCH_LOCAL_COPY, G, D, options=options),
        _entry(keyword, Operation.BATCH_LOCAL_COPY, D, D, options=options),
        # s3 to s3
        _entry(keyword, Operation.COPY, S3, S3OD, options=options),
        _entry(keyword, Operation.BATCH_COPY, S3W, S3D, options=options),
        # file to s3
        _entry(keyword, Operation.UPLOAD, F, S3OD, options=options),
        _entry(keyword, Operation.BATCH_UPLOAD, G, S3D, options=options),
        _entry(keyword, Operation.BATCH_UPLOAD, D, S3D, options=options),
        # s3 to file
        _entry(keyword, Operation.DOWNLOAD, S3, FD, options=options),
        _entry(keyword, Operation.BATCH_DOWNLOAD, S3W, D, options=options),
    ]


COMMANDS = CommandTable(
    [
        _entry("exit", Operation.ABORT),
        _entry("exit", Operation.ABORT, ParamShape.UNCHECKED),
    ]
    + _copy_entries("cp")
    + _copy_entries("mv", MOVE)
    + [
        _entry("get", Operation.ALIAS_GET, S3),
        _entry("get", Operation.ALIAS_BATCH_GET, S3W),

        _entry("rm", Operation.LOCAL_DELETE, F),
        _entry("rm", Operation.DELETE, S3),
        _entry("rm", Operation.BATCH_DELETE, S3W),
        _entry("batch-rm", Operation.BATCH_DELETE_ACTUAL, S3, ParamShape.UNCHECKED_ONE_OR_MORE),

        _entry("ls", Operation.LIST_BUCKETS),
        _entry("ls", Operation.LIST, S3OD),
        _entry("ls", Operation.LIST, S3W),

        _entry("du", Operation.SIZE, S3OD),
        _entry("du", Operation.SIZE, S3W),

        _entry("!", Operation.SHELL_EXEC, ParamShape.UNCHECKED_ONE_OR_MORE),
    ]
)


def resolve(
    keyword: str,
    args: Sequence[AbstractSet[ParamShape]] = (),
    options: Iterable[Option] = (),
) -> Resolution:
    return COMMANDS.resolve(keyword, args, options)


def render_help() -> str:
    return COMMANDS.render_help()
