"""
Tests for the Descriptor model: list access, records and coercion rules.
"""

import pytest

from ashandler.types.constants import (
    TYPE_BOOLEAN,
    TYPE_IEEE64,
    TYPE_LIST,
    TYPE_NULL,
    TYPE_RECORD,
    TYPE_SINT32,
    TYPE_UNICODE_TEXT,
    TYPE_UTF8_TEXT,
)
from ashandler.types.descriptor import Descriptor


class TestListAccess:
    """Test 1-based list operations."""

    def test_insert_zero_appends(self):
        """Insertion at index 0 means append"""
        lst = Descriptor.list()
        for i in range(3):
            lst.insert(Descriptor.int32(i), 0)

        assert [d.value for d in lst] == [0, 1, 2]
        assert lst.number_of_items == 3

    def test_insert_at_position(self):
        """Non-zero indexes are 1-based positions"""
        lst = Descriptor.list([Descriptor.int32(1), Descriptor.int32(3)])
        lst.insert(Descriptor.int32(2), 2)

        assert [d.value for d in lst] == [1, 2, 3]

    def test_insert_out_of_range(self):
        lst = Descriptor.list()
        with pytest.raises(IndexError):
            lst.insert(Descriptor.int32(1), 5)

    def test_insert_into_non_list(self):
        with pytest.raises(TypeError):
            Descriptor.int32(1).insert(Descriptor.int32(2))

    def test_at_index_is_one_based(self):
        lst = Descriptor.list([Descriptor.string("a"), Descriptor.string("b")])

        assert lst.at_index(1) == Descriptor.string("a")
        assert lst.at_index(2) == Descriptor.string("b")
        assert lst.at_index(0) is None
        assert lst.at_index(3) is None

    def test_number_of_items_for_scalars(self):
        assert Descriptor.int32(5).number_of_items == 0


class TestRecord:
    """Test record descriptors."""

    def test_set_and_get(self):
        rec = Descriptor.record()
        rec.set_for_key("name", Descriptor.string("x"))

        assert rec.for_key("name") == Descriptor.string("x")
        assert rec.for_key("missing") is None
        assert rec.record_keys() == ["name"]
        assert rec.number_of_items == 1

    def test_non_record_access(self):
        assert Descriptor.int32(1).for_key("x") is None
        assert Descriptor.int32(1).record_keys() == []
        with pytest.raises(TypeError):
            Descriptor.int32(1).set_for_key("x", Descriptor.null())


class TestEquality:
    """Test descriptor equality and the null sentinel."""

    def test_null_is_distinct(self):
        """The null descriptor never equals an encoded value"""
        null = Descriptor.null()
        others = [
            Descriptor.string(""),
            Descriptor.int32(0),
            Descriptor.double(0.0),
            Descriptor.boolean(False),
            Descriptor.list(),
            Descriptor.record(),
        ]
        for other in others:
            assert null != other
            assert not other.is_null

        assert null.is_null

    def test_kind_predicates(self):
        assert Descriptor.list().is_list
        assert not Descriptor.list().is_record
        assert Descriptor.record().is_record
        assert not Descriptor.string("x").is_list

    def test_same_value_different_tag(self):
        """int32 1, double 1.0 and boolean true are different descriptors"""
        assert Descriptor.int32(1) != Descriptor.double(1.0)
        assert Descriptor.int32(1) != Descriptor.boolean(True)

    def test_repr_uses_four_char_type(self):
        assert repr(Descriptor.int32(5)) == "Descriptor('long', 5)"


class TestCoercion:
    """Test coercion following AppleScript's native rules."""

    def test_identity(self):
        d = Descriptor.int32(7)
        assert d.coerce(TYPE_SINT32) is d

    def test_text_variants(self):
        d = Descriptor(TYPE_UTF8_TEXT, "héllo")
        assert d.coerce(TYPE_UNICODE_TEXT) == Descriptor.string("héllo")

    @pytest.mark.parametrize(
        "source,expected",
        [
            (Descriptor.int32(42), "42"),
            (Descriptor.double(2.5), "2.5"),
            (Descriptor.boolean(True), "true"),
            (Descriptor.boolean(False), "false"),
            (Descriptor.list([Descriptor.string("a"), Descriptor.string("b")]), "ab"),
            (Descriptor.list([Descriptor.string("n"), Descriptor.int32(1)]), "n1"),
            (Descriptor.list(), ""),
        ],
    )
    def test_to_text(self, source, expected):
        assert source.coerce(TYPE_UNICODE_TEXT).value == expected

    @pytest.mark.parametrize(
        "source,expected",
        [
            (Descriptor.double(3.0), 3),
            (Descriptor.double(2.5), 2),
            (Descriptor.double(3.5), 4),
            (Descriptor.string(" 12 "), 12),
            (Descriptor.string("7.6"), 8),
            (Descriptor.list([Descriptor.int32(5)]), 5),
            (Descriptor.list([Descriptor.string("6")]), 6),
            (Descriptor.boolean(True), 1),
            (Descriptor.boolean(False), 0),
        ],
    )
    def test_to_int32(self, source, expected):
        assert source.coerce(TYPE_SINT32) == Descriptor.int32(expected)

    @pytest.mark.parametrize(
        "source",
        [
            Descriptor.string("abc"),
            Descriptor.double(1e20),
            Descriptor.double(float("nan")),
            Descriptor.string("99999999999"),
            Descriptor.null(),
            Descriptor.list([Descriptor.int32(1), Descriptor.int32(2)]),
            Descriptor.list(),
        ],
    )
    def test_to_int32_refused(self, source):
        assert source.coerce(TYPE_SINT32) is None

    def test_to_double(self):
        assert Descriptor.int32(3).coerce(TYPE_IEEE64) == Descriptor.double(3.0)
        assert Descriptor.string("1.25").coerce(TYPE_IEEE64) == Descriptor.double(1.25)
        assert Descriptor.string("nope").coerce(TYPE_IEEE64) is None
        assert Descriptor.string("inf").coerce(TYPE_IEEE64) is None

    def test_to_boolean(self):
        assert Descriptor.int32(1).coerce(TYPE_BOOLEAN) == Descriptor.boolean(True)
        assert Descriptor.int32(0).coerce(TYPE_BOOLEAN) == Descriptor.boolean(False)
        assert Descriptor.string("TRUE").coerce(TYPE_BOOLEAN) == Descriptor.boolean(True)
        assert Descriptor.int32(2).coerce(TYPE_BOOLEAN) is None
        assert Descriptor.string("yes").coerce(TYPE_BOOLEAN) is None

    def test_single_item_list_unwraps(self):
        one = Descriptor.list([Descriptor.double(2.5)])

        assert one.coerce(TYPE_IEEE64) == Descriptor.double(2.5)
        assert Descriptor.list([Descriptor.int32(1)]).coerce(TYPE_BOOLEAN) == Descriptor.boolean(True)
        assert Descriptor.list([Descriptor.list([Descriptor.int32(7)])]).coerce(
            TYPE_SINT32
        ) == Descriptor.int32(7)

    def test_list_with_hole_is_not_text(self):
        assert Descriptor.list([Descriptor.string("a"), None]).coerce(TYPE_UNICODE_TEXT) is None

    def test_list_of_records_is_not_text(self):
        assert Descriptor.list([Descriptor.record()]).coerce(TYPE_UNICODE_TEXT) is None

    def test_scalar_to_list(self):
        """A single value is promoted to a one-item list"""
        coerced = Descriptor.int32(4).coerce(TYPE_LIST)
        assert coerced == Descriptor.list([Descriptor.int32(4)])

    def test_null_and_record_do_not_become_lists(self):
        assert Descriptor.null().coerce(TYPE_LIST) is None
        assert Descriptor.record().coerce(TYPE_LIST) is None

    def test_unknown_targets_refused(self):
        assert Descriptor.int32(1).coerce(TYPE_RECORD) is None
        assert Descriptor.int32(1).coerce(TYPE_NULL) is None
