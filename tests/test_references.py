"""Tests for the single-target reference validator shared by favorites and reviews."""

from types import SimpleNamespace

import pytest

from app.core.exceptions import ValidationError
from app.domain.references import (
    FAVORITE_KINDS,
    REVIEW_KINDS,
    TargetKind,
    TargetRef,
    single_reference_check,
)


class TestParse:
    def test_matching_field_is_accepted(self):
        ref = TargetRef.parse("menu_item", menu_item_id="m1")
        assert ref == TargetRef(TargetKind.MENU_ITEM, "m1")
        assert ref.column == "menu_item_id"

    def test_overall_maps_to_branch_field(self):
        ref = TargetRef.parse("overall", branch_id="b1", allowed=REVIEW_KINDS)
        assert ref.kind is TargetKind.OVERALL
        assert ref.to_columns() == {
            "type": "overall",
            "branch_id": "b1",
            "menu_item_id": None,
            "offer_id": None,
        }

    def test_overall_not_allowed_for_favorites(self):
        with pytest.raises(ValidationError) as exc:
            TargetRef.parse("overall", branch_id="b1", allowed=FAVORITE_KINDS)
        assert exc.value.details["fields"] == ["type"]
        assert "overall" not in exc.value.details["allowed"]

    def test_unknown_discriminant(self):
        with pytest.raises(ValidationError) as exc:
            TargetRef.parse("vendor", branch_id="b1")
        assert exc.value.details["fields"] == ["type"]

    def test_missing_reference_is_reported(self):
        with pytest.raises(ValidationError) as exc:
            TargetRef.parse("offer", branch_id="b1")
        details = exc.value.details
        assert details["missing"] == ["offer_id"]
        assert details["conflicting"] == ["branch_id"]

    def test_extra_reference_conflicts_even_when_expected_present(self):
        with pytest.raises(ValidationError) as exc:
            TargetRef.parse("menu_item", branch_id="b1", menu_item_id="m1")
        assert exc.value.details["conflicting"] == ["branch_id"]
        assert exc.value.details["missing"] == []

    def test_all_three_set_names_both_conflicts(self):
        with pytest.raises(ValidationError) as exc:
            TargetRef.parse("branch", branch_id="b", menu_item_id="m", offer_id="o")
        assert exc.value.details["conflicting"] == ["menu_item_id", "offer_id"]

    def test_blank_strings_count_as_absent(self):
        ref = TargetRef.parse("branch", branch_id="b1", menu_item_id="  ", offer_id="")
        assert ref.target_id == "b1"

    def test_from_row_round_trip(self):
        row = SimpleNamespace(type="offer", branch_id=None, menu_item_id=None, offer_id="o1")
        assert TargetRef.from_row(row) == TargetRef(TargetKind.OFFER, "o1")


class TestConstruction:
    def test_rejects_raw_string_kind(self):
        with pytest.raises(TypeError):
            TargetRef("branch", "b1")  # type: ignore[arg-type]

    def test_rejects_empty_id(self):
        with pytest.raises(ValueError):
            TargetRef(TargetKind.BRANCH, "")


class TestCheckExpression:
    def test_favorite_check_lists_three_kinds(self):
        expr = single_reference_check(FAVORITE_KINDS)
        assert expr.count(" OR ") == 2
        assert "overall" not in expr

    def test_review_check_includes_overall_on_branch_column(self):
        expr = single_reference_check(REVIEW_KINDS)
        assert (
            "(type = 'overall' AND branch_id IS NOT NULL AND menu_item_id IS NULL AND offer_id IS NULL)"
            in expr
        )
