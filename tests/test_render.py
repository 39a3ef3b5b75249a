from __future__ import annotations

import json

import pytest

from huffcode.engine import encode
from huffcode.render import (
    ENCODE_SCHEMA_ID,
    build_json_report,
    code_rows,
    display_symbol,
    render_json,
    render_text,
    tree_text,
    tree_to_dict,
)


def test_display_symbol() -> None:
    assert display_symbol(" ") == "' '"
    assert display_symbol("\n") == "'\\n'"
    assert display_symbol("x") == "x"
    assert display_symbol("Ω") == "Ω"


def test_code_rows_sorted_by_length_then_symbol() -> None:
    rows = code_rows(encode("abracadabra"))
    assert rows == [
        ("a", "0", 5),
        ("b", "110", 2),
        ("c", "100", 1),
        ("d", "101", 1),
        ("r", "111", 2),
    ]


def test_tree_text_two_leaves() -> None:
    assert tree_text(encode("ab").tree) == (
        "Node (Freq: 2)\n"
        "  0: Leaf: a (Freq: 1)\n"
        "  1: Leaf: b (Freq: 1)\n"
    )


def test_tree_text_single_leaf_and_empty() -> None:
    assert tree_text(encode("aaaa").tree) == "Leaf: a (Freq: 4)\n"
    assert tree_text(None) == ""


def test_tree_to_dict() -> None:
    assert tree_to_dict(encode("a b").tree) == {
        "name": "(3)",
        "char": None,
        "freq": 3,
        "children": [
            {"name": "b (1)", "char": "b", "freq": 1},
            {
                "name": "(2)",
                "char": None,
                "freq": 2,
                "children": [
                    {"name": "a (1)", "char": "a", "freq": 1},
                    {"name": "' ' (1)", "char": " ", "freq": 1},
                ],
            },
        ],
    }
    assert tree_to_dict(None) is None


def test_render_text_empty_input() -> None:
    assert render_text(encode("")) == (
        "Character Codes:\n"
        "Enter some text first.\n"
        "\n"
        "Compression Stats:\n"
        "Enter text to see stats.\n"
        "\n"
        "Huffman Tree:\n"
        "No tree to display (input might be empty).\n"
    )


def test_render_text_stats_section() -> None:
    out = render_text(encode("aaaa"), ["stats"], baseline={"zlib": 96})
    assert out.splitlines() == [
        "Compression Stats:",
        "Original Length: 4 characters",
        "Original Size: ≈ 32 bits (assuming 8 bits/char)",
        "Encoded Size: 4 bits",
        "Compression Ratio: 87.50% reduction",
        "Baseline (zlib): 96 bits",
    ]


def test_render_text_codes_table() -> None:
    lines = render_text(encode("ab a"), ["codes"]).splitlines()
    assert lines[0] == "Character Codes:"
    assert lines[1].split() == ["Character", "Huffman", "Code", "Frequency"]
    assert lines[3].split() == ["a", "0", "2"]
    assert [ln.split()[-2] for ln in lines[3:]] == ["0", "11", "10"]


def test_render_text_precision() -> None:
    out = render_text(encode("abracadabra", precision=1), ["stats"], precision=1)
    assert "Compression Ratio: 73.9% reduction" in out


@pytest.mark.parametrize("text", ["", "a", "abracadabra", "ciao Ω\n"])
def test_render_json_is_stable_and_parseable(text: str) -> None:
    r = encode(text)
    s1 = render_json(r)
    s2 = render_json(encode(text))
    assert s1 == s2
    obj = json.loads(s1)
    assert obj["schema"] == ENCODE_SCHEMA_ID
    assert obj["codes"] == r.codes
    assert obj["stats"] == r.stats.as_dict()
    assert obj["tree"] == tree_to_dict(r.tree)


def test_build_json_report_sections() -> None:
    obj = build_json_report(encode("ab"), ["stats"], baseline={"zlib": 80})
    assert set(obj) == {"schema", "stats", "baseline"}
    assert obj["baseline"] == {"zlib": 80}
