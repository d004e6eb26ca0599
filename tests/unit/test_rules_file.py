"""Unit tests for reading and writing Rules.txt."""

import pytest

from bmpblend.core.constants import BLACK, rgb_to_int
from bmpblend.core.rules import Rule
from bmpblend.formats.errors import BmpFileError, MalformedRuleLine, RulesFileError
from bmpblend.formats.rules_file import (
    format_rule,
    parse_rule_line,
    parse_rules,
    read_rules_file,
)


class TestParseRuleLine:
    """Tests for single rule lines."""

    def test_six_field_rule(self):
        rule = parse_rule_line("0, 0, 255, 0, grass_1 grass_2, 0_Floor")
        assert rule == Rule(0, rgb_to_int((0, 255, 0)), ("grass_1", "grass_2"), "0_Floor")

    def test_nine_field_rule_has_condition(self):
        rule = parse_rule_line("1, 0, 128, 0, palm_0, 0_Vegetation, 255, 255, 0")
        assert rule.bitmap_index == 1
        assert rule.condition == rgb_to_int((255, 255, 0))

    def test_null_is_empty_tile(self):
        rule = parse_rule_line("0,0,0,255,null water_1,0_Vegetation")
        assert rule.tile_choices == ("", "water_1")

    def test_tile_names_are_normalized(self):
        rule = parse_rule_line("0,1,2,3,floors_007,0_Floor")
        assert rule.tile_choices == ("floors_7",)

    def test_whitespace_around_fields(self):
        rule = parse_rule_line("  0 ,  10, 20 ,30 ,  a_1   b_2 ,  Layer  ")
        assert rule.color == rgb_to_int((10, 20, 30))
        assert rule.tile_choices == ("a_1", "b_2")
        assert rule.target_layer == "Layer"

    @pytest.mark.parametrize(
        "line, reason",
        [
            ("0, 0, 255, 0, grass_1", "at least 6 fields"),
            ("0, 0, 255, 0, grass_1, 0_Floor, 1", "three values"),
            ("0, 0, 255, 0, grass_1, 0_Floor, 1, 2", "three values"),
            ("0, 0, 255, 0, grass_1, 0_Floor, 1, 2, 3, 4", "at most 9 fields"),
            ("x, 0, 255, 0, grass_1, 0_Floor", "invalid bitmap index"),
            ("2, 0, 255, 0, grass_1, 0_Floor", "not 0 or 1"),
            ("0, 0, 256, 0, grass_1, 0_Floor", "out of range"),
            ("0, 0, 255, 0, , 0_Floor", "no tile choices"),
            ("0, 0, 255, 0, grass_1, ", "no target layer"),
            ("1, 0, 1, 0, t_1, L, 0, 0, red", "invalid condition"),
        ],
    )
    def test_malformed_lines(self, line, reason):
        with pytest.raises(MalformedRuleLine, match=reason) as exc_info:
            parse_rule_line(line, "Rules.txt", 12)
        assert exc_info.value.line_number == 12
        assert str(exc_info.value).startswith("Rules.txt:12: ")


class TestParseRules:
    def test_comments_and_blank_lines(self):
        text = "# header\n\n0,0,255,0,g_1,0_Floor  # trailing comment\n   \n"
        rules = parse_rules(text)
        assert len(rules) == 1
        assert rules[0].target_layer == "0_Floor"

    def test_error_reports_file_line_number(self):
        text = "# header\n0,0,255,0,g_1,0_Floor\n0,0,255\n"
        with pytest.raises(MalformedRuleLine) as exc_info:
            parse_rules(text, "Rules.txt")
        assert exc_info.value.line_number == 3

    def test_duplicate_rules_are_kept(self):
        text = "0,0,255,0,a_1,0_Floor\n0,0,255,0,b_1,0_Floor\n"
        assert [r.tile_choices for r in parse_rules(text)] == [("a_1",), ("b_1",)]


class TestReadRulesFile:
    def test_reads_fixture(self, rules):
        assert len(rules) == 6
        assert rules.layers == ["0_Floor", "0_Vegetation"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(RulesFileError, match="while reading"):
            read_rules_file(str(tmp_path / "nope.txt"))

    def test_errors_are_bmp_file_errors(self, tmp_path):
        path = tmp_path / "Rules.txt"
        path.write_text("0, 1, 2\n")
        with pytest.raises(BmpFileError):
            read_rules_file(str(path))


class TestFormatRule:
    def test_condition_written_only_when_set(self):
        assert format_rule(Rule(0, 0x00FF00, ("a_1", ""), "0_Floor")) == "0, 0, 255, 0, a_1 null, 0_Floor"
        veg = Rule(1, 0x008000, ("t_1",), "0_Vegetation", 0xFFFF00)
        assert format_rule(veg) == "1, 0, 128, 0, t_1, 0_Vegetation, 255, 255, 0"

    def test_black_condition_omitted(self):
        assert format_rule(Rule(1, 0x008000, ("t_1",), "V", BLACK)).count(",") == 5
