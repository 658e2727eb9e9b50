"""Tests for TOON decoder."""

import sys
from pathlib import Path

import pytest

# Add src to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from toon_codec import Options, QuotingError, StructureError, decode, decode_lines


class TestPrimitives:
    """Test decoding of primitive values."""

    def test_null(self):
        assert decode("null") is None

    def test_true(self):
        assert decode("true") is True

    def test_false(self):
        assert decode("false") is False

    def test_integer(self):
        assert decode("42") == 42
        assert decode("-17") == -17
        assert decode("0") == 0
        assert isinstance(decode("42"), int)

    def test_float(self):
        assert decode("3.14") == 3.14
        assert decode("-2.5") == -2.5

    def test_exponent_is_float(self):
        result = decode("1e3")
        assert result == 1000.0
        assert isinstance(result, float)

    def test_leading_zeros_follow_number_grammar(self):
        assert decode("007") == 7

    def test_simple_string(self):
        assert decode("hello") == "hello"

    def test_quoted_string(self):
        assert decode('"hello world"') == "hello world"

    def test_empty_quoted_string(self):
        assert decode('""') == ""

    def test_quoted_tokens_skip_classification(self):
        assert decode('"true"') == "true"
        assert decode('"42"') == "42"
        assert decode('"null"') == "null"


class TestObjects:
    """Test decoding of objects."""

    def test_simple_object(self):
        result = decode("name: Alice\nage: 30")
        assert result == {"name": "Alice", "age": 30}

    def test_key_order(self):
        assert list(decode("z: 1\na: 2\nm: 3")) == ["z", "a", "m"]

    def test_nested_object(self):
        result = decode("user:\n  name: Bob\n  role: admin")
        assert result == {"user": {"name": "Bob", "role": "admin"}}

    def test_empty_nested_object(self):
        assert decode("data:") == {"data": {}}
        assert decode("data:\nnext: 1") == {"data": {}, "next": 1}

    def test_deeply_nested(self):
        result = decode("a:\n  b:\n    c: 1")
        assert result == {"a": {"b": {"c": 1}}}

    def test_quoted_key(self):
        assert decode('"key: with colon": value') == {"key: with colon": "value"}
        assert decode('"": 1') == {"": 1}

    def test_bare_key_with_spaces(self):
        assert decode("first name: Ada") == {"first name": "Ada"}

    def test_value_with_spaces(self):
        assert decode("title: A tale of two cities") == {"title": "A tale of two cities"}


class TestArraysInline:
    """Test decoding of inline primitive arrays."""

    def test_string_array(self):
        assert decode("tags[3]: dev, api, v2") == {"tags": ["dev", "api", "v2"]}

    def test_without_spaces(self):
        assert decode("tags[3]: a,b,c") == {"tags": ["a", "b", "c"]}

    def test_mixed_primitives(self):
        result = decode('mix[5]: 1, two, true, null, "true"')
        assert result == {"mix": [1, "two", True, None, "true"]}

    def test_empty_array(self):
        assert decode("items[0]:") == {"items": []}

    def test_length_marker(self):
        assert decode("tags[#2]: a, b") == {"tags": ["a", "b"]}

    def test_quoted_delimiter(self):
        assert decode('names[2]: "Smith, J", Doe') == {"names": ["Smith, J", "Doe"]}


class TestArraysTabular:
    """Test decoding of tabular arrays."""

    def test_simple_tabular(self):
        result = decode("users[2]:{id,name}\n  1,Alice\n  2,Bob")
        assert result == {"users": [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}]}

    def test_pipe_with_length_marker(self):
        text = "users[#2]:{name|age}\n  Alice|30\n  Bob|25"
        result = decode(text, Options(delimiter="|"))
        assert result == {"users": [{"name": "Alice", "age": 30}, {"name": "Bob", "age": 25}]}

    def test_tabular_with_quoted_values(self):
        result = decode('data[2]:{key}\n  "a,b"\n  "c,d"')
        assert result == {"data": [{"key": "a,b"}, {"key": "c,d"}]}

    def test_quoted_field_names(self):
        result = decode('rows[1]:{"a,b",c}\n  1,2')
        assert result == {"rows": [{"a,b": 1, "c": 2}]}

    def test_rows_followed_by_sibling(self):
        result = decode("rows[1]:{a}\n  1\nnext: x")
        assert result == {"rows": [{"a": 1}], "next": "x"}


class TestArraysList:
    """Test decoding of list format arrays."""

    def test_primitive_list(self):
        result = decode("items[3]:\n  - 1\n  - 2\n  - 3")
        assert result == {"items": [1, 2, 3]}

    def test_object_list(self):
        result = decode("items[2]:\n  - a: 1\n  - a: 2")
        assert result == {"items": [{"a": 1}, {"a": 2}]}

    def test_object_with_several_fields(self):
        text = "items[2]:\n  - name: Widget A\n    price: 19.99\n  - name: Widget B\n    price: 29.99"
        assert decode(text) == {
            "items": [
                {"name": "Widget A", "price": 19.99},
                {"name": "Widget B", "price": 29.99},
            ]
        }

    def test_nested_object_list(self):
        result = decode("items[2]:\n  - a:\n      b: 1\n  - a:\n      b: 2")
        assert result == {"items": [{"a": {"b": 1}}, {"a": {"b": 2}}]}

    def test_mixed_list(self):
        result = decode("items[3]:\n  - 1\n  - x: 2\n  - three")
        assert result == {"items": [1, {"x": 2}, "three"]}

    def test_empty_object_in_list(self):
        assert decode("items[1]:\n  -") == {"items": [{}]}

    def test_tabular_first_field(self):
        text = "groups[1]:\n  - members[2]:{id}\n      1\n      2\n    name: g"
        assert decode(text) == {"groups": [{"members": [{"id": 1}, {"id": 2}], "name": "g"}]}


class TestRootArray:
    """Test decoding of root-level arrays."""

    def test_root_inline(self):
        assert decode("[3]: 1,2,3") == [1, 2, 3]

    def test_root_tabular(self):
        assert decode("[2]:{a}\n  1\n  2") == [{"a": 1}, {"a": 2}]

    def test_root_list(self):
        assert decode("[2]:\n  - a: 1\n  - a: 2") == [{"a": 1}, {"a": 2}]

    def test_root_empty(self):
        assert decode("[0]:") == []


class TestEscapeSequences:
    """Test string escape sequence decoding."""

    def test_newline_escape(self):
        assert decode('content: "line1\\nline2"') == {"content": "line1\nline2"}

    def test_tab_escape(self):
        assert decode('content: "col1\\tcol2"') == {"content": "col1\tcol2"}

    def test_carriage_return_escape(self):
        assert decode('content: "line1\\rline2"') == {"content": "line1\rline2"}

    def test_backslash_escape(self):
        assert decode('path: "C:\\\\Users\\\\name"') == {"path": "C:\\Users\\name"}

    def test_quote_escape(self):
        assert decode('msg: "He said \\"hello\\""') == {"msg": 'He said "hello"'}

    def test_multiline_code(self):
        toon = 'code: "def hello():\\n    print(\\"Hello, World!\\")\\n    return True"'
        expected = 'def hello():\n    print("Hello, World!")\n    return True'
        assert decode(toon) == {"code": expected}


class TestQuotingErrors:
    """Test malformed quoted tokens."""

    def test_unterminated_string(self):
        with pytest.raises(QuotingError, match="Unterminated"):
            decode('key: "unterminated')

    def test_invalid_escape_sequence(self):
        with pytest.raises(QuotingError, match="Invalid escape"):
            decode('key: "bad\\x"')

    def test_escaped_closing_quote(self):
        # A backslash followed by quote is an escaped quote, making string unterminated
        with pytest.raises(QuotingError, match="Unterminated string"):
            decode('key: "trailing\\"')

    def test_text_after_closing_quote(self):
        with pytest.raises(QuotingError, match="after closing quote"):
            decode('key: "a"b')

    def test_error_carries_line_number(self):
        with pytest.raises(QuotingError) as excinfo:
            decode('a: 1\nb: 2\nc: "oops')
        assert excinfo.value.line_number == 3
        assert str(excinfo.value).startswith("line 3:")

    def test_quoting_errors_apply_in_non_strict_mode(self):
        with pytest.raises(QuotingError):
            decode('key: "bad\\q"', Options(strict=False))


class TestDelimiters:
    """Test delimiter handling."""

    def test_tab_delimiter(self):
        result = decode("items[3]: 1\t2\t3", Options(delimiter="\t"))
        assert result == {"items": [1, 2, 3]}

    def test_pipe_delimiter(self):
        result = decode("items[3]: 1|2|3", Options(delimiter="|"))
        assert result == {"items": [1, 2, 3]}

    def test_tabular_tab_delimiter(self):
        result = decode("users[2]:{id\tname}\n  1\tAlice\n  2\tBob", Options(delimiter="\t"))
        assert result == {"users": [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}]}


class TestEdgeCases:
    """Test edge cases and error handling."""

    def test_empty_input(self):
        assert decode("") == {}
        assert decode("   ") == {}

    def test_only_whitespace_lines(self):
        assert decode("\n\n") == {}

    def test_crlf_line_endings(self):
        assert decode("a: 1\r\nb:\r\n  c: 2\r\n") == {"a": 1, "b": {"c": 2}}

    def test_numeric_string_preserved(self):
        assert decode('id: "007"') == {"id": "007"}

    def test_negative_zero(self):
        assert decode("value: -0") == {"value": 0}

    def test_blank_lines_between_entries(self):
        assert decode("a: 1\n\nb: 2\n") == {"a": 1, "b": 2}

    def test_list_item_outside_array(self):
        with pytest.raises(StructureError, match="list item"):
            decode("- a")

    def test_line_without_colon_in_object(self):
        with pytest.raises(StructureError, match="Expected key"):
            decode("a: 1\nfoo")

    def test_invalid_array_header(self):
        with pytest.raises(StructureError, match="Invalid array header"):
            decode("items[x]: 1")

    def test_decode_lines(self):
        assert decode_lines(["a:", "  b: 1"]) == {"a": {"b": 1}}


class TestComplexStructures:
    """Test complex nested structures."""

    def test_object_with_multiple_arrays(self):
        result = decode("tags[2]: a,b\nnums[3]: 1,2,3")
        assert result == {"tags": ["a", "b"], "nums": [1, 2, 3]}

    def test_array_of_arrays(self):
        result = decode("matrix[2]:\n  - [2]: 1,2\n  - [2]: 3,4")
        assert result == {"matrix": [[1, 2], [3, 4]]}

    def test_deeply_nested_structure(self):
        toon = """root:
  level1:
    level2:
      level3: value
      items[2]: a,b"""
        result = decode(toon)
        assert result == {
            "root": {"level1": {"level2": {"level3": "value", "items": ["a", "b"]}}}
        }

    def test_list_in_list_item_field(self):
        toon = "a[1]:\n  - k[2]:\n      - x: 1\n      - 2\n    z: 1"
        assert decode(toon) == {"a": [{"k": [{"x": 1}, 2], "z": 1}]}
