from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from s3batch.errors import cleanup, is_acceptable
from s3batch.operations import Operation
from s3batch.options import OPTIONS_HELP_ORDER, Option, has, render
from s3batch.params import ParamShape, shape_label


class Resolution(BaseModel):
    """One resolved invocation: consumed once by the executor."""

    model_config = ConfigDict(frozen=True)

    keyword: str
    operation: Operation
    params: Tuple[ParamShape, ...] = ()
    options: FrozenSet[Option] = Field(default_factory=frozenset)
    arg_count: int = 0
    entry_index: int = Field(0, ge=0, description="Position of the matched entry in the command table")

    def has(self, option: Option) -> bool:
        return has(self.options, option)

    @property
    def description(self) -> str:
        return self.operation.describe(self.options)

    @property
    def ordered_options(self) -> Tuple[Option, ...]:
        ordered = [o for o in OPTIONS_HELP_ORDER if o in self.options]
        ordered += [o for o in Option if o in self.options and o not in ordered]
        return tuple(ordered)

    @property
    def flags(self) -> str:
        return render(self.ordered_options)

    def summary(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "operation": self.operation.name,
            "description": self.description,
            "params": [shape_label(p) for p in self.params],
            "options": [o.name for o in self.ordered_options],
            "flags": self.flags.strip(),
            "arg_count": self.arg_count,
        }


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    ACCEPTABLE = "acceptable"
    FAILURE = "failure"


class Outcome(BaseModel):
    """Result of one executed operation: success, acceptable skip or failure."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status: OutcomeStatus
    error: Optional[BaseException] = None

    @classmethod
    def from_error(cls, err: Optional[BaseException]) -> "Outcome":
        if err is None:
            return cls(status=OutcomeStatus.SUCCESS)
        if is_acceptable(err) is not None:
            return cls(status=OutcomeStatus.ACCEPTABLE, error=err)
        return cls(status=OutcomeStatus.FAILURE, error=err)

    @property
    def is_failure(self) -> bool:
        return self.status is OutcomeStatus.FAILURE

    @property
    def message(self) -> str:
        return cleanup(self.error)


def exit_code(outcomes: Iterable[Outcome]) -> int:
    return 1 if any(o.is_failure for o in outcomes) else 0
