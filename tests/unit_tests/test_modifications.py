"""Unit tests for the MS Amanda modification grammar."""

import pytest

from alphapeptio.exceptions import ModificationGrammarError, ParseError
from alphapeptio.matches import ModificationType
from alphapeptio.modifications import (
    parse_annotation,
    parse_annotations,
    parse_modifications,
    parse_site,
)


class TestParseSite:
    """Test location -> site resolution."""

    def test_n_term(self):
        assert parse_site("N-Term", "ABCDEF", "x") == 1

    def test_c_term(self):
        assert parse_site("C-Term", "ABCDEF", "x") == 6

    def test_case_insensitive_terminus(self):
        assert parse_site("n-term", "ABCDEF", "x") == 1
        assert parse_site("C-TERM", "ABCDEF", "x") == 6

    def test_residue_position(self):
        assert parse_site("C4", "ABCDEF", "x") == 4
        assert parse_site("M12", "A" * 12, "x") == 12

    def test_residue_letter_not_checked(self):
        # D4 on a sequence with C at position 4 is accepted
        assert parse_site("D4", "ABCCEF", "x") == 4

    def test_invalid_location(self):
        with pytest.raises(ModificationGrammarError, match="invalid location"):
            parse_site("Cx", "ABCDEF", "Cx(a|1|fixed)")

    def test_missing_position(self):
        with pytest.raises(ModificationGrammarError):
            parse_site("C", "ABCDEF", "C(a|1|fixed)")

    def test_site_not_range_checked(self):
        assert parse_site("C7", "ABCDEF", "C7(a|1|fixed)") == 7
        assert parse_site("C0", "ABCDEF", "C0(a|1|fixed)") == 0


class TestParseAnnotation:
    """Test single annotation parsing."""

    def test_variable(self):
        mod = parse_annotation("M3(Oxidation|15.994915|variable)", "PEMTIDE")
        assert mod.site == 3
        assert mod.mass == pytest.approx(15.994915)
        assert mod.fixed_or_variable is ModificationType.VARIABLE
        assert mod.identifier == "15.994915@M"
        assert mod.name == "oxidation"

    def test_fixed(self):
        mod = parse_annotation("C4(carbamidomethyl c|57.021464|fixed)", "ABCCEF")
        assert mod.fixed_or_variable is ModificationType.FIXED
        assert not mod.is_variable

    def test_flag_case_insensitive(self):
        mod = parse_annotation("M3(Oxidation|15.994915|VARIABLE)", "PEMTIDE")
        assert mod.is_variable

    def test_comma_mass(self):
        mod = parse_annotation("M3(oxidation|15,994915|variable)", "PEMTIDE")
        assert mod.mass == pytest.approx(15.994915)

    def test_identifier_uses_sequence_residue(self):
        mod = parse_annotation("N-Term(acetylation|42.010565|variable)", "ABCDEF")
        assert mod.identifier == "42.010565@A"
        mod = parse_annotation("C-Term(amidation|-0.984016|variable)", "ABCDEF")
        assert mod.site == 6
        assert mod.identifier == "-0.984016@F"

    def test_extra_trailing_fields(self):
        mod = parse_annotation("M3(oxidation|15.994915|variable|unimod:35|extra)", "PEMTIDE")
        assert mod.is_variable
        assert mod.mass == pytest.approx(15.994915)

    def test_parentheses_in_name(self):
        mod = parse_annotation("N-Term(acetyl (protein n-term)|42.010565|variable)", "ABC")
        assert mod.name == "acetyl (protein n-term)"
        assert mod.site == 1

    def test_too_few_fields(self):
        with pytest.raises(ModificationGrammarError, match="field") as excinfo:
            parse_annotation("M3(oxidation|15.994915)", "PEMTIDE")
        assert excinfo.value.annotation == "M3(oxidation|15.994915)"

    def test_missing_open_parenthesis(self):
        with pytest.raises(ModificationGrammarError, match=r"missing '\('"):
            parse_annotation("M3oxidation|15.99|variable", "PEMTIDE")

    def test_missing_close_parenthesis(self):
        with pytest.raises(ModificationGrammarError, match=r"missing '\)'"):
            parse_annotation("M3(oxidation|15.99|variable", "PEMTIDE")

    def test_invalid_mass(self):
        with pytest.raises(ModificationGrammarError, match="invalid mass"):
            parse_annotation("M3(oxidation|heavy|variable)", "PEMTIDE")

    def test_error_is_parse_error(self):
        with pytest.raises(ParseError):
            parse_annotation("garbage", "PEMTIDE")

    def test_variable_site_outside_sequence(self):
        with pytest.raises(ModificationGrammarError, match="outside"):
            parse_annotation("M9(oxidation|15.994915|variable)", "PEPTIDEK")
        with pytest.raises(ModificationGrammarError, match="outside"):
            parse_annotation("M0(oxidation|15.994915|variable)", "PEPTIDEK")

    def test_fixed_site_outside_sequence(self):
        mod = parse_annotation("C12(carbamidomethyl|57.02|fixed)", "PEPTIDEK")
        assert mod.site == 12
        assert mod.fixed_or_variable is ModificationType.FIXED
        assert mod.identifier == "57.02@C"

    def test_unknown_flag_is_not_variable(self):
        mod = parse_annotation("M3(oxidation|15.994915|static)", "PEMTIDE")
        assert mod.fixed_or_variable is ModificationType.FIXED


class TestParseModifications:
    """Test parsing of the full modification column."""

    def test_empty(self):
        assert parse_modifications("", "PEPTIDE") == []
        assert parse_modifications("   ", "PEPTIDE") == []

    def test_fixed_dropped(self):
        mods = parse_modifications(
            "N-Term(acetylation|42.010565|variable);C4(carbamidomethyl|57.021465|fixed)",
            "ABCDEF",
        )
        assert len(mods) == 1
        assert mods[0].site == 1
        assert mods[0].mass == pytest.approx(42.010565)
        assert mods[0].is_variable

    def test_fixed_outside_sequence_dropped(self):
        mods = parse_modifications(
            "C12(carbamidomethyl|57.02|fixed);K8(methyl|14.01565|variable)",
            "PEPTIDEK",
        )
        assert [(mod.site, mod.identifier) for mod in mods] == [(8, "14.01565@K")]

    def test_all_annotations_kept_in_order(self):
        annotations = parse_annotations(
            "N-Term(acetylation|42.010565|variable);C4(carbamidomethyl|57.021465|fixed)",
            "ABCDEF",
        )
        assert [a.site for a in annotations] == [1, 4]
        assert [a.fixed_or_variable for a in annotations] == [
            ModificationType.VARIABLE,
            ModificationType.FIXED,
        ]

    def test_multiple_variable(self):
        mods = parse_modifications(
            "M1(oxidation|15.994915|variable);S3(phospho|79.966331|variable)",
            "MASK",
        )
        assert [mod.identifier for mod in mods] == ["15.994915@M", "79.966331@S"]

    def test_trailing_semicolon(self):
        mods = parse_modifications("M1(oxidation|15.994915|variable);", "MASK")
        assert len(mods) == 1

    def test_empty_annotation_in_middle(self):
        with pytest.raises(ModificationGrammarError):
            parse_modifications("M1(oxidation|15.99|variable);;S3(phospho|79.97|variable)", "MASK")

    def test_one_bad_annotation_rejects_column(self):
        with pytest.raises(ModificationGrammarError) as excinfo:
            parse_modifications("M1(oxidation|15.99|variable);S9(phospho|79.97|variable)", "MASK")
        assert excinfo.value.annotation == "S9(phospho|79.97|variable)"
