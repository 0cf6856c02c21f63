from enum import Enum
from typing import Iterable, List

from s3batch.errors import UnknownOptionError


class Option(Enum):
    """Modifiers for operations. Set by the user with a flag, or as a command default."""

    DELETE_SOURCE = 1  # delete source file/object after a successful copy
    IF_NOT_EXISTS = 2  # run only if destination does not exist
    PARENTS = 3  # like cp --parents
    RR = 4  # reduced-redundancy
    IA = 5  # infrequent-access
    RECURSIVE = 6  # recursive copy/move (local)
    LIST_ETAGS = 7  # include ETags in listing
    HUMAN_READABLE = 8  # human-readable sizes (ls, du)

    @property
    def flag(self) -> str:
        return flag(self)

    @property
    def help_text(self) -> str:
        return help_text(self)

    @classmethod
    def from_flag(cls, text: str) -> "Option":
        for o in cls:
            if text and _FLAGS.get(o) == text:
                return o
        raise UnknownOptionError(f"unknown option flag: {text!r}")


_FLAGS = {
    Option.IF_NOT_EXISTS: "-n",
    Option.PARENTS: "--parents",
    Option.RR: "-rr",
    Option.IA: "-ia",
    Option.RECURSIVE: "-R",
    Option.LIST_ETAGS: "-e",
    Option.HUMAN_READABLE: "-h",
}

_HELP = {
    Option.IF_NOT_EXISTS: "Do not overwrite existing files/objects (no-clobber)",
    Option.PARENTS: "Create directory structure in destination, starting from the first wildcard",
    Option.RECURSIVE: "Recursive operation",
    Option.RR: "Store with Reduced-Redundancy mode",
    Option.IA: "Store with Infrequent-Access mode",
    Option.LIST_ETAGS: "Show ETags in listing",
    Option.HUMAN_READABLE: "Human-readable output for file sizes",
}

# Display order for the options listing, not the declaration order.
OPTIONS_HELP_ORDER = (
    Option.IF_NOT_EXISTS,
    Option.PARENTS,
    Option.RECURSIVE,
    Option.RR,
    Option.IA,
    Option.LIST_ETAGS,
    Option.HUMAN_READABLE,
)


def flag(option: Option) -> str:
    return _FLAGS.get(option, "")


def help_text(option: Option) -> str:
    return _HELP.get(option, "")


def has(options: Iterable[Option], check: Option) -> bool:
    return any(o == check for o in options)


def render(options: Iterable[Option]) -> str:
    """Concatenated flags of an option list, e.g. " -n --parents", or "" if none have flags."""
    flags = [flag(o) for o in options]
    joined = " ".join(f for f in flags if f)
    if joined:
        return " " + joined
    return ""


def options_help() -> str:
    """Text of accepted command options with their help messages."""
    out: List[str] = []
    for o in OPTIONS_HELP_ORDER:
        text = help_text(o)
        if not text:
            continue
        out.append(f"  {flag(o):<10} {text}")
    return "\n".join(out) + "\n"
