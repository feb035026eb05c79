import logging
import pytest
from xrawconv.converter import (
    DEFAULT_COLORS_PATH, Converter, ConverterOptions, load_color_text,
)
from xrawconv.core.errors import (
    CapacityError, FormatError, MalformedLineWarning, UnresolvedNameNotice,
)
from xrawconv.formats.xraw import XrawFormat

REGION = "SizeX: 1\nSizeY: 1\nSizeZ: 2\nNodes:\n- Name: air\n- Name: stone\n"


def region_text(names, size=None):
    size = size or (len(names), 1, 1)
    lines = [f"SizeX: {size[0]}", f"SizeY: {size[1]}", f"SizeZ: {size[2]}", "Nodes:"]
    lines += [f"- Name: {name}" for name in names]
    return "\n".join(lines) + "\n"


def test_convert_example():
    result = Converter().convert(REGION, "stone 100 100 100\n")

    assert result.data[24:26] == bytes([0, 1])
    assert result.data[26:34] == bytes([0, 0, 0, 0, 100, 100, 100, 255])
    assert len(result.data) == 24 + 2 + 1024
    assert result.diagnostics == []


def test_convert_is_deterministic():
    colors = "b 1 2 3\na 4 5 6 7\nair 9 9 9\n"
    text = region_text(["a", "b", "air", "c", "ignore", "b"])

    assert Converter().convert(text, colors).data == Converter().convert(text, colors).data


def test_unmatched_name_uses_index_one(caplog):
    with caplog.at_level(logging.WARNING, logger="xrawconv.converter"):
        result = Converter().convert(region_text(["stone", "mystery"]), "stone 1 1 1\n")

    assert result.data[24:26] == bytes([1, 1])
    notices = [d for d in result.diagnostics if isinstance(d, UnresolvedNameNotice)]
    assert [n.name for n in notices] == ["mystery"]
    assert "mystery" in caplog.text


def test_full_miss_header_is_logged_without_notices(caplog):
    with caplog.at_level(logging.WARNING, logger="xrawconv.converter"):
        result = Converter().convert(region_text(["air", "ignore"]), "stone 1 1 1\n")

    assert result.diagnostics == []
    assert "None of the node types are recognized" in caplog.text
    assert result.data[24:26] == bytes([0, 1])


def test_malformed_color_lines_are_collected():
    result = Converter().convert(REGION, "stone 1 2\nstone 100 100 100\nbad x 1 1\n")

    warnings = [d for d in result.diagnostics if isinstance(d, MalformedLineWarning)]
    assert [w.line_number for w in warnings] == [1, 3]
    assert result.palette.indices["stone"] == 1


def test_custom_empty_node():
    options = ConverterOptions(empty_node_name="vacuum")
    result = Converter(options).convert(region_text(["vacuum", "stone"]), "stone 1 1 1\n")

    assert result.palette.indices["vacuum"] == 0
    assert result.data[24:26] == bytes([0, 1])


def test_header_round_trip():
    result = Converter().convert(region_text(["a"] * 12, size=(2, 3, 2)), "a 1 1 1\n")
    document = XrawFormat.decode(result.data)

    assert document.size == (2, 3, 2)
    assert document.palette_size == 256
    assert len(document.voxels) == 12


def test_bad_size_aborts():
    with pytest.raises(FormatError):
        Converter().convert("SizeX: big\nSizeY: 1\nSizeZ: 1\nNodes:\n", "")


def test_too_many_colors_aborts():
    names = [f"n{i}" for i in range(256)]
    colors = "".join(f"{name} 1 2 3\n" for name in names)

    with pytest.raises(CapacityError):
        Converter().convert(region_text(names), colors)


def test_convert_file(tmp_path):
    source = tmp_path / "region.txt"
    target = tmp_path / "region.xraw"
    source.write_text(REGION, encoding="utf-8")
    (tmp_path / "Colors.txt").write_text("stone 100 100 100\n", encoding="utf-8")

    result = Converter().convert_file(source, target, working_dir=tmp_path)

    assert target.read_bytes() == result.data
    assert result.palette.colors[1].to_tuple() == (100, 100, 100, 255)


def test_convert_file_writes_through_xraw_format(tmp_path, monkeypatch):
    source = tmp_path / "region.txt"
    source.write_text(REGION, encoding="utf-8")
    saved = []
    monkeypatch.setattr(XrawFormat, "save", lambda *args: saved.append(args))

    Converter().convert_file(source, tmp_path / "region.xraw", working_dir=tmp_path)

    assert len(saved) == 1
    assert not (tmp_path / "region.xraw").exists()


def test_convert_file_leaves_no_output_on_failure(tmp_path):
    source = tmp_path / "region.txt"
    target = tmp_path / "region.xraw"
    source.write_text("SizeX: ?\nSizeY: 1\nSizeZ: 1\nNodes:\n", encoding="utf-8")

    with pytest.raises(FormatError):
        Converter().convert_file(source, target, working_dir=tmp_path)
    assert not target.exists()


def test_load_color_text_prefers_working_directory(tmp_path):
    override = tmp_path / "Colors.txt"
    override.write_text("stone 1 2 3\n", encoding="utf-8")

    text, path = load_color_text(ConverterOptions(), tmp_path)

    assert path == override
    assert text == "stone 1 2 3\n"


def test_load_color_text_falls_back_to_bundled(tmp_path):
    text, path = load_color_text(ConverterOptions(), tmp_path)

    assert path == DEFAULT_COLORS_PATH
    assert "default:stone" in text


def test_load_color_text_explicit_path(tmp_path):
    explicit = tmp_path / "mine.txt"
    explicit.write_text("dirt 1 1 1\n", encoding="utf-8")
    (tmp_path / "Colors.txt").write_text("stone 1 2 3\n", encoding="utf-8")

    text, path = load_color_text(ConverterOptions(colors_path=explicit), tmp_path)

    assert path == explicit
    assert text.startswith("dirt")


def test_bundled_colors_parse_cleanly():
    text = DEFAULT_COLORS_PATH.read_text(encoding="utf-8")
    result = Converter().convert(region_text(["default:stone", "default:dirt"]), text)

    assert result.diagnostics == []
    assert len(result.colors) > 50
    assert result.palette.indices == {"air": 0, "default:dirt": 1, "default:stone": 2}
