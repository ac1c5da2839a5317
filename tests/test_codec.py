"""Unit tests for the KEY=VALUE line codec and value types."""

import pytest

from live_config.codec import (
    check_writable,
    decode_value,
    encode_assignment,
    split_assignment,
    unquote,
)
from live_config.errors import UnsafeValueError
from live_config.values import Array, Scalar, coerce, to_plain


class TestSplitAssignment:
    def test_splits_on_first_equals(self):
        assert split_assignment('OPTS="a=b"') == ("OPTS", '"a=b"')

    def test_no_equals(self):
        assert split_assignment("just text") is None

    def test_empty_value(self):
        assert split_assignment("KEY=") == ("KEY", "")


class TestUnquote:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ('"value"', "value"),
            ("'value'", "value"),
            ("value", "value"),
            ('""', ""),
            ('value"', "value"),
            ('"\'nested\'"', "nested"),
            ('"two words"', "two words"),
        ],
    )
    def test_strips_one_layer(self, raw, expected):
        assert unquote(raw) == expected

    def test_only_one_layer_of_double_quotes(self):
        assert unquote('""x""') == '"x"'


class TestDecodeValue:
    def test_scalar(self):
        assert decode_value('"live user"') == Scalar("live user")

    def test_array_with_quoted_elements(self):
        assert decode_value('(ssh "network manager" cron)') == Array(
            ("ssh", "network manager", "cron")
        )

    def test_quoted_array(self):
        assert decode_value('"(a b)"') == Array(("a", "b"))

    def test_empty_array(self):
        assert decode_value("()").is_empty()

    def test_unbalanced_quote_falls_back_to_whitespace_split(self):
        assert decode_value('(a "b)') == Array(("a", "b"))

    def test_parenthesis_inside_scalar(self):
        assert decode_value('"x (y)"') == Scalar("x (y)")


class TestEncodeAssignment:
    def test_scalar_is_double_quoted(self):
        assert encode_assignment("HOSTNAME", Scalar("debian")) == 'HOSTNAME="debian"'

    def test_array_elements_are_quoted(self):
        assert encode_assignment("SERVICES", Array(("ssh", "cron"))) == 'SERVICES=("ssh" "cron")'

    def test_empty_values(self):
        assert encode_assignment("K", Scalar("")) == 'K=""'
        assert encode_assignment("K", Array(())) == "K=()"

    def test_encoded_value_decodes_back(self):
        value = Array(("one", "two words", ""))
        raw = encode_assignment("K", value).split("=", 1)[1]
        assert decode_value(raw) == value


class TestCheckWritable:
    @pytest.mark.parametrize("key", ["1ABC", "A-B", "", "A B", "#A"])
    def test_rejects_bad_keys(self, key):
        with pytest.raises(UnsafeValueError):
            check_writable(key, Scalar("x"))

    @pytest.mark.parametrize(
        "text",
        ['say "hi"', "line\nbreak", "(a b)", "'quoted", "quoted'"],
    )
    def test_rejects_unsafe_scalars(self, text):
        with pytest.raises(UnsafeValueError):
            check_writable("KEY", Scalar(text))

    @pytest.mark.parametrize("item", ['a"b', "a\\b", "a\nb"])
    def test_rejects_unsafe_array_elements(self, item):
        with pytest.raises(UnsafeValueError):
            check_writable("KEY", Array(("ok", item)))

    def test_accepts_common_values(self):
        check_writable("LIVE_USER_FULLNAME", Scalar("Debian Live user"))
        check_writable("NOTE", Scalar("it's fine"))
        check_writable("PATH_LIKE", Scalar("C:\\live"))
        check_writable("_private", Array(("a b", "(c)")))

    def test_unsafe_value_is_a_value_error(self):
        assert issubclass(UnsafeValueError, ValueError)


class TestValues:
    def test_coerce(self):
        assert coerce("x") == Scalar("x")
        assert coerce(["a", "b"]) == Array(("a", "b"))
        assert coerce(("a",)) == Array(("a",))
        assert coerce(None) is None
        assert coerce(Scalar("y")) == Scalar("y")

    def test_coerce_rejects_other_types(self):
        with pytest.raises(TypeError):
            coerce(5)
        with pytest.raises(TypeError):
            coerce(["a", 1])

    def test_array_stores_tuple(self):
        assert Array(["a", "b"]).items == ("a", "b")

    def test_is_empty(self):
        assert Scalar("").is_empty()
        assert not Scalar("0").is_empty()
        assert Array().is_empty()

    def test_to_plain(self):
        assert to_plain({"A": Scalar("1"), "S": Array(("x", "y"))}) == {
            "A": "1",
            "S": ["x", "y"],
        }
