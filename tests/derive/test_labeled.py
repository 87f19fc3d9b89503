"""Tests for the @labeled class decorator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

import pytest

from dbent import LABEL, DeriveError, Key, Label, LabelTag, Labeled, Ok, Tag, Tagged, keyed, labeled
from dbent.derive import attach_tagged
from tests._support.records import Customer, CustomerModel


class TestLabeledGeneratesAccessor:
    """Test the generated label() method."""

    def test_dataclass(self, customer):
        assert customer.label().unwrap() == "Ada"

    def test_pydantic_model(self):
        assert CustomerModel(id=Key.new(1), name="Bo").label().unwrap() == "Bo"

    def test_metadata(self):
        assert Customer.__label_field__ == "name"
        assert Customer.__label_type__ is str
        assert CustomerModel.__label_type__ is str

    def test_satisfies_protocol(self, customer):
        assert isinstance(customer, Labeled)

    def test_label_need_not_be_first(self):
        @labeled
        @dataclass
        class Row:
            id: int
            code: str
            title: Label[str]

        assert Row(1, "c", "T").label().unwrap() == "T"

    def test_label_without_key(self):
        """@labeled works alone; tag() needs both."""

        @labeled
        @dataclass
        class Row:
            title: Label[str]

        assert Row("x").label().unwrap() == "x"
        assert not hasattr(Row, "tag")


class TestLabelMarkerForms:
    """Test the ways a field can be marked."""

    def test_annotated_constant(self):
        @labeled
        @dataclass
        class Row:
            title: Annotated[str, LABEL]

        assert Row.__label_field__ == "title"

    def test_annotated_instance(self):
        @labeled
        @dataclass
        class Row:
            title: Annotated[int, LabelTag()]

        assert Row.__label_type__ is int

    def test_unresolvable_label_type(self):
        @labeled
        @dataclass
        class Row:
            title: Label[NotDefinedAnywhere]  # noqa: F821

        assert Row.__label_type__ == "NotDefinedAnywhere"

    def test_unresolvable_annotated(self):
        @labeled
        @dataclass
        class Row:
            title: Annotated[NotDefinedAnywhere, LABEL]  # noqa: F821

        assert Row.__label_field__ == "title"


class TestLabeledRejects:
    """Test declarations @labeled refuses."""

    def test_no_marked_field(self):
        with pytest.raises(DeriveError, match="needs to have 1 field marked with Label, found 0"):
            @labeled
            @dataclass
            class Row:
                id: Key[int]
                title: str

    def test_two_marked_fields(self):
        with pytest.raises(DeriveError, match="found 2") as exc:
            @labeled
            @dataclass
            class Row:
                first: Label[str]
                last: Label[str]

        assert exc.value.context.field == "first, last"

    def test_field_named_label(self):
        with pytest.raises(DeriveError, match="cannot use a field named 'label'"):
            @labeled
            @dataclass
            class Row:
                label: Label[str]

    def test_not_a_class(self):
        with pytest.raises(DeriveError, match="can only be used on classes"):
            labeled(42)


class TestTaggedDerivation:
    """Test the blanket Tagged implementation."""

    @pytest.mark.parametrize("order", ["keyed_first", "labeled_first"])
    def test_decorator_order_irrelevant(self, order):
        @dataclass
        class Row:
            id: Key[int]
            title: Label[str]

        if order == "keyed_first":
            Row = labeled(keyed(Row))
        else:
            Row = keyed(labeled(Row))

        row = Row(Key.new(3), "three")
        assert isinstance(row, Tagged)
        assert row.tag().unwrap() == Tag(key="3", label="three")
        assert Row(Key(), "draft").has_tag() is False

    def test_own_tag_not_replaced(self):
        @dataclass
        class Row:
            id: Key[int]
            title: Label[str]

            def tag(self):
                return Ok(Tag(key="custom"))

        Row = labeled(keyed(Row))
        assert Row(Key.new(1), "x").tag().unwrap() == Tag(key="custom")

    def test_attach_needs_both(self):
        class OnlyKey:
            def key(self):
                return Ok(Key.new(1))

        assert attach_tagged(OnlyKey) is False
        assert not hasattr(OnlyKey, "tag")

    def test_attach_hand_written(self):
        class Both:
            def key(self):
                return Ok(Key.new(1))

            def label(self):
                return Ok("one")

        assert attach_tagged(Both) is True
        assert Both().tag().unwrap() == Tag(key="1", label="one")
