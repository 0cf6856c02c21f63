import pytest

from s3batch.commands import COMMANDS, CommandEntry, CommandTable, resolve
from s3batch.errors import (
    CommandTableError,
    DuplicateCommandError,
    OptionNotAcceptedError,
    ResolutionError,
    UnsupportedInvocationError,
)
from s3batch.operations import Operation
from s3batch.options import Option
from s3batch.params import ParamShape as P


def _exact(entry):
    return [frozenset({p}) for p in entry.params]


def test_every_entry_resolves_from_its_own_signature():
    for entry in COMMANDS:
        res = resolve(entry.keyword, _exact(entry))
        assert res.operation is entry.operation
        assert res.keyword == entry.keyword


def test_own_signature_hits_first_matching_entry():
    for i, entry in enumerate(COMMANDS):
        res = resolve(entry.keyword, _exact(entry))
        assert res.entry_index <= i
        assert COMMANDS[res.entry_index].matches(entry.keyword, _exact(entry))


def test_unknown_keyword_fails():
    with pytest.raises(UnsupportedInvocationError) as exc:
        resolve("sync", [{P.S3_OBJ}, {P.DIR}])
    assert exc.value.keyword == "sync"
    assert exc.value.arg_count == 2


def test_wrong_arity_fails():
    with pytest.raises(UnsupportedInvocationError) as exc:
        resolve("cp", [{P.FILE_OBJ}])
    assert exc.value.arg_count == 1
    with pytest.raises(UnsupportedInvocationError):
        resolve("du", [])


def test_wrong_shapes_fail():
    with pytest.raises(UnsupportedInvocationError):
        resolve("cp", [{P.S3_DIR}, {P.GLOB}])
    with pytest.raises(ResolutionError):
        resolve("ls", [{P.FILE_OBJ}])


def test_file_beats_glob_for_local_copy():
    res = resolve("cp", [{P.FILE_OBJ, P.GLOB}, {P.FILE_OR_DIR, P.DIR}])
    assert res.operation is Operation.LOCAL_COPY


def test_glob_source_resolves_to_batch_when_not_a_file():
    res = resolve("cp", [{P.GLOB}, {P.FILE_OR_DIR, P.DIR}])
    assert res.operation is Operation.BATCH_LOCAL_COPY


def test_exact_key_beats_wildcard():
    res = resolve("rm", [{P.S3_OBJ, P.S3_WILD_OBJ}])
    assert res.operation is Operation.DELETE


def test_upload_and_download_directions():
    assert resolve("cp", [{P.FILE_OBJ}, {P.S3_OBJ_OR_DIR, P.S3_DIR}]).operation is Operation.UPLOAD
    assert resolve("cp", [{P.DIR}, {P.S3_DIR}]).operation is Operation.BATCH_UPLOAD
    assert resolve("cp", [{P.S3_OBJ}, {P.FILE_OR_DIR}]).operation is Operation.DOWNLOAD
    assert resolve("cp", [{P.S3_WILD_OBJ}, {P.S3_DIR}]).operation is Operation.BATCH_COPY


def test_mv_defaults_to_delete_source():
    res = resolve("mv", [{P.S3_OBJ}, {P.S3_OBJ_OR_DIR}])
    assert res.operation is Operation.COPY
    assert res.has(Option.DELETE_SOURCE)
    assert res.description == "Move S3 object"
    assert not resolve("cp", [{P.S3_OBJ}, {P.S3_OBJ_OR_DIR}]).has(Option.DELETE_SOURCE)


def test_accepted_option_is_added():
    res = resolve("mv", [{P.FILE_OBJ}, {P.S3_OBJ_OR_DIR}], [Option.IF_NOT_EXISTS, Option.RR])
    assert res.options == frozenset({Option.DELETE_SOURCE, Option.IF_NOT_EXISTS, Option.RR})
    assert res.flags == " -n -rr"


def test_option_not_accepted_fails():
    with pytest.raises(OptionNotAcceptedError) as exc:
        resolve("ls", [{P.S3_OBJ_OR_DIR}], [Option.RR])
    assert exc.value.option is Option.RR
    assert exc.value.operation is Operation.LIST
    with pytest.raises(OptionNotAcceptedError):
        resolve("cp", [{P.S3_OBJ}, {P.S3_OBJ_OR_DIR}], [Option.DELETE_SOURCE])


def test_variadic_accepts_any_remaining_arity():
    assert resolve("!", [set()]).operation is Operation.SHELL_EXEC
    assert resolve("!", [set(), set(), set()]).arg_count == 3
    with pytest.raises(UnsupportedInvocationError):
        resolve("!", [])
    assert resolve("batch-rm", [{P.S3_OBJ}, set(), set()]).operation is Operation.BATCH_DELETE_ACTUAL
    with pytest.raises(UnsupportedInvocationError):
        resolve("batch-rm", [{P.S3_OBJ}])


def test_exit_with_and_without_code():
    assert resolve("exit").operation is Operation.ABORT
    assert resolve("exit", [{P.UNCHECKED}]).operation is Operation.ABORT
    with pytest.raises(UnsupportedInvocationError):
        resolve("exit", [set(), set()])


def test_get_aliases():
    assert resolve("get", [{P.S3_OBJ}]).operation is Operation.ALIAS_GET
    assert resolve("get", [{P.S3_WILD_OBJ}], [Option.PARENTS]).has(Option.PARENTS)


def test_resolution_is_immutable():
    res = resolve("ls")
    with pytest.raises(Exception):
        res.keyword = "du"


def test_duplicate_signature_rejected():
    entries = [
        CommandEntry("rm", Operation.DELETE, (P.S3_OBJ,)),
        CommandEntry("rm", Operation.BATCH_DELETE, (P.S3_OBJ,)),
    ]
    with pytest.raises(DuplicateCommandError):
        CommandTable(entries)


def test_same_shapes_under_other_keyword_allowed():
    table = CommandTable([
        CommandEntry("cp", Operation.COPY, (P.S3_OBJ, P.S3_OBJ_OR_DIR)),
        CommandEntry("mv", Operation.COPY, (P.S3_OBJ, P.S3_OBJ_OR_DIR), frozenset({Option.DELETE_SOURCE})),
    ])
    assert len(table) == 2
    assert table.keywords == ["cp", "mv"]


def test_variadic_must_be_last():
    with pytest.raises(CommandTableError):
        CommandTable([CommandEntry("x", Operation.SHELL_EXEC, (P.UNCHECKED_ONE_OR_MORE, P.S3_OBJ))])


def test_empty_table_resolves_nothing():
    with pytest.raises(UnsupportedInvocationError):
        CommandTable([]).resolve("ls")
