import pytest
from xrawconv.core.colors import ColorDefinition, ColorTableParser
from xrawconv.core.errors import FormatError


def parse(text):
    parser = ColorTableParser()
    table = parser.parse(text)
    return table, parser.diagnostics


def test_parse_rgb_and_rgba():
    table, diagnostics = parse("stone 100 100 100\nglass 200 220 240 90\n")

    assert table["stone"] == ColorDefinition("stone", 100, 100, 100, 255)
    assert table["glass"].to_tuple() == (200, 220, 240, 90)
    assert diagnostics == []


def test_comments_and_blank_lines_are_ignored():
    table, diagnostics = parse("# header\n\n   \n#stone 1 2 3\ndirt 1 2 3\n")

    assert table.names() == ["dirt"]
    assert diagnostics == []


def test_last_definition_wins_and_keeps_position():
    table, _ = parse("a 1 1 1\nb 2 2 2\na 9 9 9 9\n")

    assert table.names() == ["a", "b"]
    assert table["a"].to_tuple() == (9, 9, 9, 9)


@pytest.mark.parametrize("line", [
    "stone 1 2",
    "stone 1 2 3 4 5",
    "stone  1 2 3",
    "stone",
])
def test_wrong_field_count_is_skipped(line):
    table, diagnostics = parse(f"{line}\ndirt 1 2 3\n")

    assert "stone" not in table
    assert "dirt" in table
    assert len(diagnostics) == 1
    assert diagnostics[0].source == "colors"
    assert diagnostics[0].line_number == 1


@pytest.mark.parametrize("line", [
    "stone red 2 3",
    "stone 1 2 3 opaque",
    "stone 256 0 0",
    "stone 0 -1 0",
    "stone 0 0 0 300",
    "stone +5 0 0",
    "stone 1_0 0 0",
    "stone \u0661 0 0",
])
def test_bad_channel_skips_only_that_line(line):
    table, diagnostics = parse(f"dirt 1 2 3\n{line}\nsand 4 5 6\n")

    assert table.names() == ["dirt", "sand"]
    assert [d.line_number for d in diagnostics] == [2]


def test_parse_values_raises_format_error():
    with pytest.raises(FormatError):
        ColorTableParser.parse_values(["stone", "1", "x", "3"])
