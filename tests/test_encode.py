"""Tests for TOON encoder."""

import sys
from datetime import date, datetime
from pathlib import Path

import pytest

# Add src to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from toon_codec import (
    Delimiter,
    EncodeOptions,
    InvalidDelimiterError,
    InvalidInputError,
    InvalidStructureError,
    TypeMismatchError,
    encode,
    encode_array,
    encode_default,
    encode_lines,
    encode_object,
)
from toon_codec.classifier import ArrayShape, classify_array
from toon_codec.primitives import encode_field_name, encode_key, format_array_header


class TestPrimitives:
    """Test encoding of primitive values."""

    def test_null(self):
        assert encode(None) == "null"

    def test_true(self):
        assert encode(True) == "true"

    def test_false(self):
        assert encode(False) == "false"

    def test_integer(self):
        assert encode(42) == "42"
        assert encode(-17) == "-17"
        assert encode(0) == "0"

    def test_big_integer_is_not_narrowed(self):
        assert encode(2**70) == str(2**70)

    def test_float(self):
        assert encode(3.14) == "3.14"
        assert encode(-2.5) == "-2.5"
        assert encode(5.0) == "5.0"

    def test_negative_zero(self):
        assert encode(-0.0) == "0"

    def test_float_special_values(self):
        assert encode(float("nan")) == "null"
        assert encode(float("inf")) == "null"
        assert encode(float("-inf")) == "null"

    def test_simple_string(self):
        assert encode("hello") == "hello"

    def test_string_with_spaces(self):
        assert encode("hello world") == "hello world"

    def test_string_needs_quotes(self):
        # Contains colon
        assert encode("key: value") == '"key: value"'
        # Contains brackets
        assert encode("array[0]") == '"array[0]"'
        # Contains newline
        assert encode("line1\nline2") == '"line1\\nline2"'
        # Contains tab
        assert encode("col1\tcol2") == '"col1\\tcol2"'

    def test_reserved_literals(self):
        assert encode("true") == '"true"'
        assert encode("false") == '"false"'
        assert encode("null") == '"null"'

    def test_numeric_strings(self):
        assert encode("123") == '"123"'
        assert encode("-45") == '"-45"'
        assert encode("3.14") == '"3.14"'
        assert encode("1e5") == '"1e5"'

    def test_leading_zero_string_stays_bare(self):
        assert encode("007") == "007"

    def test_list_marker_strings(self):
        assert encode("-") == '"-"'
        assert encode("- item") == '"- item"'
        assert encode("-x") == "-x"

    def test_empty_string(self):
        assert encode("") == '""'

    def test_surrounding_whitespace(self):
        assert encode(" padded ") == '" padded "'


class TestObjects:
    """Test encoding of objects."""

    def test_empty_object(self):
        assert encode({}) == ""

    def test_simple_object(self):
        assert encode({"name": "Alice", "age": 30}) == "name: Alice\nage: 30"

    def test_nested_object(self):
        result = encode({"user": {"name": "Bob", "role": "admin"}})
        assert result.split("\n") == ["user:", "  name: Bob", "  role: admin"]

    def test_empty_nested_object(self):
        assert encode({"data": {}}) == "data:"

    def test_quoted_key(self):
        assert encode({"key with spaces": "value"}) == '"key with spaces": value'

    def test_key_quoting(self):
        assert encode({"": 1}) == '"": 1'
        assert encode({"a:b": 1}) == '"a:b": 1'
        assert encode({"123": 1}) == '"123": 1'
        assert encode({"-": 1}) == "-: 1"

    def test_non_string_keys(self):
        assert encode({1: "a", None: "b", False: "c"}) == '"1": a\n"null": b\n"false": c'


class TestArraysInline:
    """Test inline primitive array encoding."""

    def test_string_array(self):
        assert encode({"tags": ["admin", "ops", "dev"]}) == "tags[3]: admin,ops,dev"

    def test_number_array(self):
        assert encode({"nums": [1, 2, 3]}) == "nums[3]: 1,2,3"

    def test_mixed_primitives(self):
        assert encode({"mix": [1, "two", True, None]}) == "mix[4]: 1,two,true,null"

    def test_values_containing_delimiter_are_quoted(self):
        assert encode({"items": ["a,b", "c"]}) == 'items[2]: "a,b",c'

    def test_empty_string_element(self):
        assert encode({"items": ["", "x"]}) == 'items[2]: "",x'

    def test_empty_array(self):
        assert encode({"items": []}) == "items[0]:"


class TestArraysTabular:
    """Test tabular array encoding."""

    def test_simple_tabular(self):
        result = encode(
            {
                "users": [
                    {"id": 1, "name": "Alice", "role": "admin"},
                    {"id": 2, "name": "Bob", "role": "user"},
                ]
            }
        )
        assert result == "users[2]{id,name,role}:\n  1,Alice,admin\n  2,Bob,user"

    def test_tabular_with_quoted_values(self):
        result = encode({"data": [{"key": "a,b"}, {"key": "c,d"}]})
        assert result.split("\n") == ["data[2]{key}:", '  "a,b"', '  "c,d"']

    def test_quoted_field_names(self):
        result = encode({"rows": [{"first name": "A", "x": 1}]})
        assert result.split("\n")[0] == 'rows[1]{"first name",x}:'

    def test_key_order_must_match(self):
        result = encode({"items": [{"a": 1, "b": 2}, {"b": 3, "a": 4}]})
        assert result.split("\n")[0] == "items[2]:"

    def test_nested_value_prevents_tabular(self):
        result = encode({"items": [{"a": 1, "b": [1]}, {"a": 2, "b": [2]}]})
        assert result.split("\n")[0] == "items[2]:"


class TestArraysList:
    """Test list format array encoding."""

    def test_nested_objects(self):
        result = encode({"items": [{"a": {"b": 1}}, {"a": {"b": 2}}]})
        assert result.split("\n") == [
            "items[2]:",
            "  - a:",
            "      b: 1",
            "  - a:",
            "      b: 2",
        ]

    def test_mixed_types(self):
        result = encode({"items": [1, {"x": 2}, "three"]})
        assert result.split("\n") == ["items[3]:", "  - 1", "  - x: 2", "  - three"]

    def test_object_item_siblings(self):
        result = encode({"items": [{"id": 1, "tags": ["a", "b"], "meta": {"k": "v"}}, 5]})
        assert result.split("\n") == [
            "items[2]:",
            "  - id: 1",
            "    tags[2]: a,b",
            "    meta:",
            "      k: v",
            "  - 5",
        ]

    def test_array_of_arrays(self):
        result = encode({"matrix": [[1, 2], [3, 4], []]})
        assert result.split("\n") == [
            "matrix[3]:",
            "  - [2]: 1,2",
            "  - [2]: 3,4",
            "  - [0]:",
        ]

    def test_tabular_array_inside_list(self):
        result = encode({"groups": [[{"a": 1}, {"a": 2}], 3]})
        assert result.split("\n") == [
            "groups[2]:",
            "  - [2]{a}:",
            "    1",
            "    2",
            "  - 3",
        ]

    def test_empty_object_item(self):
        assert encode({"items": [{}, 1]}) == "items[2]:\n  -\n  - 1"


class TestRootArray:
    """Test root-level array encoding."""

    def test_root_inline(self):
        assert encode([1, 2, 3]) == "[3]: 1,2,3"

    def test_root_tabular(self):
        assert encode([{"a": 1}, {"a": 2}]) == "[2]{a}:\n  1\n  2"

    def test_root_list(self):
        result = encode([{"a": {"b": 1}}, {"a": {"b": 2}}])
        assert result.split("\n")[:2] == ["[2]:", "  - a:"]

    def test_root_empty(self):
        assert encode([]) == "[0]:"


class TestEscapeSequences:
    """Test string escape sequence encoding."""

    def test_newline_escape(self):
        assert encode({"content": "line1\nline2"}) == 'content: "line1\\nline2"'

    def test_tab_escape(self):
        assert encode({"content": "col1\tcol2"}) == 'content: "col1\\tcol2"'

    def test_carriage_return_escape(self):
        assert encode({"content": "line1\rline2"}) == 'content: "line1\\rline2"'

    def test_backslash_escape(self):
        assert encode({"path": "C:\\Users\\name"}) == 'path: "C:\\\\Users\\\\name"'

    def test_quote_escape(self):
        assert encode({"msg": 'He said "hello"'}) == 'msg: "He said \\"hello\\""'

    def test_multiline_content(self):
        content = 'def hello():\n    print("Hello, World!")\n    return True'
        result = encode({"code": content})
        assert result.count("\n") == 0
        assert "\\n" in result


class TestDelimiters:
    """Test delimiter options."""

    def test_tab_delimiter(self):
        result = encode({"items": [1, 2, 3]}, EncodeOptions(delimiter="\t"))
        assert result == "items[3\t]: 1\t2\t3"

    def test_pipe_delimiter(self):
        result = encode({"tags": ["a", "b", "c"]}, EncodeOptions(delimiter=Delimiter.PIPE))
        assert result == "tags[3|]: a|b|c"

    def test_delimiter_by_name(self):
        assert EncodeOptions(delimiter="pipe").delimiter is Delimiter.PIPE

    def test_comma_allowed_unquoted_with_pipe(self):
        result = encode({"items": ["a,b", "c|d"]}, EncodeOptions(delimiter="|"))
        assert result == 'items[2|]: a,b|"c|d"'

    def test_tabular_pipe_header(self):
        result = encode({"rows": [{"a": 1, "b": 2}]}, EncodeOptions(delimiter="|"))
        assert result == "rows[1|]{a|b}:\n  1|2"

    def test_invalid_delimiter(self):
        with pytest.raises(InvalidDelimiterError):
            EncodeOptions(delimiter=";")


class TestLengthMarker:
    """Test the optional length marker."""

    def test_hash_marker(self):
        result = encode({"tags": ["a", "b", "c"]}, EncodeOptions(length_marker="#"))
        assert result == "tags[#3]: a,b,c"

    def test_marker_with_delimiter_and_fields(self):
        options = EncodeOptions(length_marker="#", delimiter="|")
        assert format_array_header(2, "rows", ["a", "b"], options) == "rows[#2|]{a|b}:"

    def test_invalid_marker(self):
        with pytest.raises(InvalidInputError):
            EncodeOptions(length_marker="7")
        with pytest.raises(InvalidInputError):
            EncodeOptions(length_marker="##")


class TestIndentation:
    """Test indentation options."""

    def test_default_indent(self):
        assert encode({"a": {"b": 1}}) == "a:\n  b: 1"

    def test_custom_indent(self):
        assert encode({"a": {"b": 1}}, EncodeOptions(indent=4)) == "a:\n    b: 1"

    def test_list_item_layout_follows_indent(self):
        result = encode({"items": [{"a": {"x": 1}, "b": 2}]}, EncodeOptions(indent=4))
        assert result.split("\n") == [
            "items[1]:",
            "    - a:",
            "            x: 1",
            "        b: 2",
        ]

    def test_invalid_indent(self):
        with pytest.raises(InvalidInputError):
            EncodeOptions(indent="\t")
        with pytest.raises(InvalidInputError):
            EncodeOptions(indent=0)


class TestNormalization:
    """Test value normalization."""

    def test_tuple_to_list(self):
        assert encode({"items": (1, 2, 3)}) == "items[3]: 1,2,3"

    def test_set_to_list(self):
        assert encode({"items": {3, 1, 2}}) == "items[3]: 1,2,3"

    def test_datetime_to_isoformat(self):
        result = encode({"timestamp": datetime(2024, 1, 15, 10, 30, 0)})
        assert result == 'timestamp: "2024-01-15T10:30:00"'

    def test_date_to_isoformat(self):
        assert encode({"day": date(2024, 1, 15)}) == 'day: "2024-01-15"'

    def test_unsupported_type(self):
        with pytest.raises(TypeMismatchError):
            encode({"x": object()})


class TestEntryPoints:
    """Test the encode convenience functions."""

    def test_encode_lines(self):
        assert list(encode_lines({"a": 1, "b": [1, 2]})) == ["a: 1", "b[2]: 1,2"]

    def test_encode_default(self):
        assert encode_default({"a": [1]}) == "a[1]: 1"

    def test_encode_object(self):
        assert encode_object({"a": 1}) == "a: 1"
        with pytest.raises(TypeMismatchError, match="expected object, found array"):
            encode_object([1])

    def test_encode_array(self):
        assert encode_array((1, 2)) == "[2]: 1,2"
        with pytest.raises(TypeMismatchError, match="expected array, found string"):
            encode_array("x")

    def test_depth_ceiling(self):
        value = {}
        for _ in range(300):
            value = {"a": value}
        with pytest.raises(InvalidStructureError):
            encode(value)

    def test_self_reference(self):
        value = []
        value.append(value)
        with pytest.raises(InvalidStructureError):
            encode(value)


class TestClassifier:
    """Test array shape classification."""

    def test_tabular(self):
        assert classify_array([{"a": 1}, {"a": None}]) == (ArrayShape.TABULAR, ["a"])

    def test_primitive(self):
        assert classify_array([1, "x", None]) == (ArrayShape.PRIMITIVE, None)

    def test_nested(self):
        assert classify_array([1, [2]]) == (ArrayShape.NESTED, None)
        assert classify_array([{}, {}]) == (ArrayShape.NESTED, None)

    def test_empty_field_name_is_not_tabular(self):
        assert classify_array([{"": 1}]) == (ArrayShape.NESTED, None)

    def test_encode_key_helper(self):
        assert encode_key("name") == "name"
        assert encode_key("a b") == '"a b"'

    @pytest.mark.parametrize("name", ["id", "a b", "-", "x|y", "1", "k:v"])
    def test_field_names_quote_like_keys(self, name):
        assert encode_field_name(name) == encode_key(name)
        assert encode_field_name(name, Delimiter.PIPE) == encode_key(name, Delimiter.PIPE)
