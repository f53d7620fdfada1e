"""Unit tests for roll-expression evaluation."""

from __future__ import annotations

import pytest

from dicebag.errors import ErrorKind, InvalidExpressionError
from dicebag.evaluator import Prefix, RollResult, evaluate, split_prefix, validate
from dicebag.sampler import Sampler


class TestSplitPrefix:
    @pytest.mark.parametrize(
        "text,prefix,remainder",
        [
            ("2d6", Prefix.none, "2d6"),
            ("max:2d20", Prefix.max, "2d20"),
            ("min:2d20", Prefix.min, "2d20"),
            ("half:4d13", Prefix.half, "4d13"),
            ("dub:3d8", Prefix.double, "3d8"),
            ("dropL:4d6", Prefix.drop_lowest, "4d6"),
            ("dropH:4d6", Prefix.drop_highest, "4d6"),
        ],
    )
    def test_prefixes(self, text: str, prefix: Prefix, remainder: str) -> None:
        assert split_prefix(text) == (prefix, remainder)

    def test_only_one_prefix_is_stripped(self) -> None:
        assert split_prefix("max:dub:2d6") == (Prefix.max, "dub:2d6")

    def test_prefix_is_case_sensitive(self) -> None:
        assert split_prefix("MAX:2d6") == (Prefix.none, "MAX:2d6")


class TestValidate:
    @pytest.mark.parametrize("text", ["2d6+3", "max:2d20-2", "dropL:4d6+2", "half:3d8+3+d6"])
    def test_valid(self, text: str) -> None:
        assert validate(text) is True

    @pytest.mark.parametrize(
        "text", ["heyo", "-2d6", "max:2d20+1d6", "min:2d20+1d6", "max:max:2d6", "dub:2E20fff"]
    )
    def test_invalid(self, text: str) -> None:
        assert validate(text) is False


class TestStandardRolls:
    def test_single_term(self, sampler: Sampler) -> None:
        result = evaluate("5d10", sampler)
        assert result.ok
        assert len(result.rolls) == 5
        assert all(1 <= r <= 10 for r in result.rolls)
        assert result.total == sum(result.rolls)

    def test_implicit_count(self, sampler: Sampler) -> None:
        assert len(evaluate("d6", sampler).rolls) == 1

    @pytest.mark.parametrize("expression,modifier", [("2d20+3", 3), ("3d6-2", -2), ("3d33+", 0)])
    def test_modifier(self, sampler: Sampler, expression: str, modifier: int) -> None:
        result = evaluate(expression, sampler)
        assert result.total == sum(result.rolls) + modifier

    def test_one_sided_dice(self, sampler: Sampler) -> None:
        result = evaluate("2d1+3", sampler)
        assert result.rolls == [1, 1]
        assert result.total == 5

    def test_zero_dice_contribute_only_modifier(self, sampler: Sampler) -> None:
        result = evaluate("0d4+8", sampler)
        assert result == RollResult(rolls=[], total=8)

    def test_without_sampler(self) -> None:
        result = evaluate("3d1")
        assert result.total == 3

    def test_large_counts_are_allowed(self, sampler: Sampler) -> None:
        result = evaluate("1001d1", sampler)
        assert result.ok
        assert len(result.rolls) == 1001
        assert result.total == 1001
        assert validate("1d1000001")


class TestPairs:
    def test_add_pair(self, sampler: Sampler) -> None:
        result = evaluate("2d20+3+2d6+1", sampler)
        assert len(result.rolls) == 4
        assert result.total == sum(result.rolls[:2]) + 3 + sum(result.rolls[2:]) + 1

    def test_subtract_pair(self, sampler: Sampler) -> None:
        result = evaluate("2d20+3-2d6-1", sampler)
        assert result.total == sum(result.rolls[:2]) + 3 - (sum(result.rolls[2:]) - 1)

    def test_pair_without_modifiers(self, sampler: Sampler) -> None:
        result = evaluate("d12-d3", sampler)
        assert len(result.rolls) == 2
        assert result.total == result.rolls[0] - result.rolls[1]

    def test_zero_dice_pair(self, sampler: Sampler) -> None:
        result = evaluate("0d4+3-0d6+2", sampler)
        assert result.rolls == []
        assert result.total == 1


class TestMaxMin:
    def test_max(self, sampler: Sampler) -> None:
        result = evaluate("max:2d20", sampler)
        assert len(result.rolls) == 2
        assert result.total == max(result.rolls)

    def test_max_with_modifier(self, sampler: Sampler) -> None:
        result = evaluate("max:2d20-2", sampler)
        assert result.total == max(result.rolls) - 2

    def test_min_with_modifier(self, sampler: Sampler) -> None:
        result = evaluate("min:2d20+3", sampler)
        assert result.total == min(result.rolls) + 3

    def test_zero_dice(self, sampler: Sampler) -> None:
        assert evaluate("max:0d20", sampler) == RollResult(rolls=[], total=0)
        assert evaluate("min:0d20+3", sampler) == RollResult(rolls=[], total=3)

    @pytest.mark.parametrize("expression", ["max:2d20+1d6", "min:2d20+1d6"])
    def test_pair_is_rejected(self, sampler: Sampler, expression: str) -> None:
        result = evaluate(expression, sampler)
        assert result.error is ErrorKind.invalid_expression
        assert result.rolls == []
        assert result.total == 0


class TestHalfDouble:
    def test_double(self, sampler: Sampler) -> None:
        result = evaluate("dub:3d8", sampler)
        assert len(result.rolls) == 3
        assert result.total == 2 * sum(result.rolls)

    def test_double_applies_after_pair(self, sampler: Sampler) -> None:
        result = evaluate("dub:3d20+3-2d6-1", sampler)
        primary = sum(result.rolls[:3]) + 3
        secondary = sum(result.rolls[3:]) - 1
        assert result.total == 2 * (primary - secondary)

    def test_double_zero_dice(self, sampler: Sampler) -> None:
        assert evaluate("dub:0d8+3", sampler).total == 6

    def test_half(self, sampler: Sampler) -> None:
        result = evaluate("half:3d8+3", sampler)
        assert result.total == (sum(result.rolls) + 3) // 2

    def test_half_applies_after_pair(self, sampler: Sampler) -> None:
        result = evaluate("half:3d20+3+2d6-1", sampler)
        assert result.total == (sum(result.rolls[:3]) + 3 + sum(result.rolls[3:]) - 1) // 2

    def test_half_truncates_toward_zero(self, sampler: Sampler) -> None:
        assert evaluate("half:1d1-4", sampler).total == -1
        assert evaluate("half:0d8+3", sampler).total == 1


class TestDrop:
    def test_drop_lowest(self, sampler: Sampler) -> None:
        result = evaluate("dropL:4d6+2", sampler)
        assert len(result.rolls) == 4
        assert result.total == sum(result.rolls) + 2 - min(result.rolls)

    def test_drop_highest(self, sampler: Sampler) -> None:
        result = evaluate("dropH:4d13", sampler)
        assert result.total == sum(result.rolls) - max(result.rolls)

    def test_drop_zero_dice(self, sampler: Sampler) -> None:
        assert evaluate("dropL:0d4+3", sampler).total == 3
        assert evaluate("dropH:0d8+3", sampler).total == 3

    def test_drop_only_considers_primary_term(self, sampler: Sampler) -> None:
        result = evaluate("dropH:2d12+4-d6-2", sampler)
        primary = result.rolls[:2]
        expected = sum(primary) + 4 - max(primary) - (result.rolls[2] - 2)
        assert result.total == expected

    def test_drop_lowest_with_pair(self, sampler: Sampler) -> None:
        result = evaluate("dropL:3d8+3+d6", sampler)
        primary = result.rolls[:3]
        assert result.total == sum(primary) + 3 - min(primary) + result.rolls[3]


class TestErrors:
    @pytest.mark.parametrize(
        "expression", ["heyo", "-2d6", "a5d10*zz", "2d-4", "max:2d20zzz", "min:2E20fff"]
    )
    def test_invalid_expression(self, sampler: Sampler, expression: str) -> None:
        result = evaluate(expression, sampler)
        assert not result.ok
        assert result.error is ErrorKind.invalid_expression
        assert result.rolls == []
        assert result.total == 0

    def test_raise_for_error(self, sampler: Sampler) -> None:
        with pytest.raises(InvalidExpressionError):
            evaluate("heyo", sampler).raise_for_error()

    def test_raise_for_error_passes_success_through(self, sampler: Sampler) -> None:
        result = evaluate("1d1", sampler)
        assert result.raise_for_error() is result


class TestDeterminism:
    def test_same_seed_same_result(self) -> None:
        first = evaluate("dropL:4d6+2-2d8", Sampler(7))
        second = evaluate("dropL:4d6+2-2d8", Sampler(7))
        assert first == second
