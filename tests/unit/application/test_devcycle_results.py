"""Unit tests for vendor variable → ProviderEvaluation conversion."""

from __future__ import annotations

from devcycle_openfeature.application.devcycle import (
    EvalReason,
    Variable,
    build_evaluation,
    default_evaluation,
    eval_reason,
    flag_metadata,
)
from devcycle_openfeature.application.provider import Reason


def _variable(*, is_defaulted: bool, eval: EvalReason | None = None) -> Variable[str]:
    return Variable(key="k", value="v", default_value="d", is_defaulted=is_defaulted, eval=eval)


class TestEvalReason:
    def test_defaulted_without_eval(self) -> None:
        assert eval_reason(_variable(is_defaulted=True)) == Reason.DEFAULT

    def test_served_without_eval(self) -> None:
        assert eval_reason(_variable(is_defaulted=False)) == Reason.TARGETING_MATCH

    def test_vendor_reason_wins(self) -> None:
        variable = _variable(is_defaulted=False, eval=EvalReason(reason="SPLIT"))
        assert eval_reason(variable) == "SPLIT"

    def test_unknown_vendor_reason_passes_through(self) -> None:
        variable = _variable(is_defaulted=True, eval=EvalReason(reason="OPT_IN"))
        assert eval_reason(variable) == "OPT_IN"


class TestFlagMetadata:
    def test_empty_without_eval(self) -> None:
        assert flag_metadata(_variable(is_defaulted=False)) == {}

    def test_details_and_target(self) -> None:
        variable = _variable(
            is_defaulted=False,
            eval=EvalReason(reason="TARGETING_MATCH", details="Email AND Country", target_id="t1"),
        )
        assert flag_metadata(variable) == {"evalDetails": "Email AND Country", "evalTargetId": "t1"}

    def test_only_present_fields(self) -> None:
        variable = _variable(is_defaulted=False, eval=EvalReason(reason="SPLIT", target_id="t1"))
        assert flag_metadata(variable) == {"evalTargetId": "t1"}


class TestBuildEvaluation:
    def test_carries_reason_and_metadata(self) -> None:
        variable = _variable(
            is_defaulted=False, eval=EvalReason(reason="SPLIT", details="50/50")
        )
        evaluation = build_evaluation(variable, "converted")
        assert evaluation.value == "converted"
        assert evaluation.reason == "SPLIT"
        assert evaluation.flag_metadata == {"evalDetails": "50/50"}
        assert evaluation.variant is None

    def test_default_evaluation(self) -> None:
        evaluation = default_evaluation(42)
        assert evaluation.value == 42
        assert evaluation.reason == Reason.DEFAULT
        assert evaluation.flag_metadata == {}
