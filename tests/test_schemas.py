from s3batch.errors import AcceptableError, RequestFailure
from s3batch.operations import Operation
from s3batch.options import Option
from s3batch.params import ParamShape
from s3batch.schemas import Outcome, OutcomeStatus, Resolution, exit_code


def test_resolution_summary():
    res = Resolution(
        keyword="cp",
        operation=Operation.BATCH_UPLOAD,
        params=(ParamShape.GLOB, ParamShape.S3_DIR),
        options=frozenset({Option.PARENTS, Option.IF_NOT_EXISTS}),
        arg_count=2,
    )
    summary = res.summary()
    assert summary["operation"] == "BATCH_UPLOAD"
    assert summary["description"] == "Batch upload to S3"
    assert summary["params"] == ["glob-pattern*", "s3://bucket[/object]/"]
    assert summary["options"] == ["IF_NOT_EXISTS", "PARENTS"]
    assert summary["flags"] == "-n --parents"


def test_outcome_three_way():
    assert Outcome.from_error(None).status is OutcomeStatus.SUCCESS
    skipped = Outcome.from_error(AcceptableError("object exists"))
    assert skipped.status is OutcomeStatus.ACCEPTABLE
    assert not skipped.is_failure
    failed = Outcome.from_error(RequestFailure("NoSuchKey", "gone\n", 404))
    assert failed.is_failure
    assert "\n" not in failed.message


def test_exit_code_ignores_acceptable():
    ok = [Outcome.from_error(None), Outcome.from_error(AcceptableError("exists"))]
    assert exit_code(ok) == 0
    assert exit_code(ok + [Outcome.from_error(RuntimeError("x"))]) == 1
    assert exit_code([]) == 0
