"""
Tests for WCAG criterion and technique lookups.
"""

import pytest
from wcag_reference import (
    get_criterion_data,
    get_link_to_criterion,
    get_technique_data,
    get_link_to_technique,
)
from wcag_reference.dataset import default_dataset
from wcag_reference.exceptions import (
    InvalidVersionError,
    CriterionNotFoundError,
    ChapterNotFoundError,
    SectionNotFoundError,
    SubsectionNotFoundError,
    TechniqueNotFoundError,
    WCAGReferenceError,
)
from wcag_reference.models import CriterionRecord, TechniqueRecord, WCAGVersion
from wcag_reference.reference import WCAGReference, parse_criterion_number, technique_prefix


WCAG_URLS = {
    '2.0': 'https://www.w3.org/TR/WCAG20/',
    '2.1': 'https://www.w3.org/TR/WCAG21/',
    '2.2': 'https://www.w3.org/TR/WCAG22/',
}

INVALID_VERSIONS = ['3.0', '2', '', '2.10', ' 2.1', 'wcag21', 2.1, None]


def all_coordinates():
    """Every (version, chapter, section, subsection) present in the bundled data."""
    for version, data in default_dataset().items():
        for chapter, principle in data.principles.items():
            for section, guideline in principle.guidelines.items():
                for subsection in guideline.success_criteria:
                    yield version.value, chapter, section, subsection


@pytest.fixture
def reference():
    return WCAGReference()


class TestVersionResolution:
    """Tests for version validation."""

    @pytest.mark.parametrize('version', ['2.0', '2.1', '2.2'])
    def test_valid_versions(self, reference, version):
        """Test every supported version resolves to its own partition."""
        data = reference.resolve_version(version)
        assert data.version.value == version
        assert data.url == WCAG_URLS[version]

    def test_enum_member_accepted(self, reference):
        """Test WCAGVersion members are accepted as versions."""
        assert reference.resolve_version(WCAGVersion.V2_2).url == WCAG_URLS['2.2']

    @pytest.mark.parametrize('version', INVALID_VERSIONS)
    def test_invalid_versions_rejected_by_every_lookup(self, reference, version):
        """Test all four lookups reject unknown versions before traversal."""
        with pytest.raises(InvalidVersionError):
            reference.get_criterion_data(version, 1, 1, 1)
        with pytest.raises(InvalidVersionError):
            reference.get_link_to_criterion(version, 1, 1, 1)
        with pytest.raises(InvalidVersionError):
            reference.get_technique_data(version, 'G57')
        with pytest.raises(InvalidVersionError):
            reference.get_link_to_technique(version, 'G57')

    def test_invalid_version_wins_over_bad_coordinates(self, reference):
        """Test version is checked before any coordinate."""
        with pytest.raises(InvalidVersionError):
            reference.get_criterion_data('9.9', 99, 99, 99)
        with pytest.raises(InvalidVersionError):
            reference.get_technique_data('9.9', 'ZZZ99')

    def test_invalid_version_message(self, reference):
        """Test the error message for an unknown version."""
        with pytest.raises(InvalidVersionError, match="Requested WCAG Version isn't valid!"):
            reference.resolve_version('2')

    def test_invalid_version_is_value_error(self, reference):
        """Test the version error can be caught as ValueError."""
        with pytest.raises(ValueError):
            reference.resolve_version('1.0')


class TestCriterionData:
    """Tests for get_criterion_data."""

    def test_keyboard_criterion(self):
        """Test the documented 2.1.1 Keyboard example."""
        record = get_criterion_data('2.1', 2, 1, 1)

        assert isinstance(record, CriterionRecord)
        assert record.to_dict() == {
            'id': 'keyboard',
            'handle': '2.1.1 Keyboard',
            'quickReference': 'https://www.w3.org/WAI/WCAG21/quickref/#keyboard',
            'detailedReference': 'https://www.w3.org/WAI/WCAG21/Understanding/keyboard.html',
            'level': 1,
            'wcagUrl': 'https://www.w3.org/TR/WCAG21/',
        }

    def test_wcag20_criterion(self):
        """Test a WCAG 2.0 criterion keeps its own URLs."""
        record = get_criterion_data('2.0', 1, 4, 3)

        assert record.handle == '1.4.3 Contrast (Minimum)'
        assert record.level == 2
        assert record.wcag_url == WCAG_URLS['2.0']

    def test_double_digit_subsection(self):
        """Test subsections above 9 resolve (2.4.11 in WCAG 2.2)."""
        record = get_criterion_data('2.2', 2, 4, 11)
        assert record.handle.startswith('2.4.11 ')

    def test_all_criteria_well_formed(self):
        """Test every stored criterion has a level and its version's URL."""
        count = 0
        for version, chapter, section, subsection in all_coordinates():
            record = get_criterion_data(version, chapter, section, subsection)
            assert record.level in (1, 2, 3)
            assert record.wcag_url == WCAG_URLS[version]
            assert record.handle.startswith(f"{chapter}.{section}.{subsection} ")
            count += 1

        assert count > 200

    def test_repeated_calls_identical(self):
        """Test repeated lookups give equal records with the same URL."""
        first = get_criterion_data('2.2', 2, 4, 7)
        second = get_criterion_data('2.2', 2, 4, 7)

        assert first == second
        assert first.wcag_url == second.wcag_url

    def test_returns_fresh_record(self):
        """Test the stored criterion is not handed out or altered."""
        stored = default_dataset()[WCAGVersion.V2_1].principles[2].guidelines[1].success_criteria[1]
        record = get_criterion_data('2.1', 2, 1, 1)

        assert record is not stored
        assert not hasattr(stored, 'wcag_url')

    def test_record_is_immutable(self):
        """Test returned records cannot be modified."""
        record = get_criterion_data('2.1', 2, 1, 1)
        with pytest.raises(AttributeError):
            record.level = 3


class TestCriterionErrors:
    """Tests for per-level criterion errors."""

    def test_chapter_missing(self):
        """Test a missing chapter raises the chapter error even with garbage below."""
        with pytest.raises(ChapterNotFoundError, match="Requested chapter doesn't exist!"):
            get_criterion_data('2.1', 99, 1, 1)

    def test_chapter_checked_before_section(self):
        """Test chapter precedence over section and subsection."""
        with pytest.raises(ChapterNotFoundError):
            get_criterion_data('2.1', 5, 99, 99)

    def test_section_missing(self):
        """Test a missing section raises the section error."""
        with pytest.raises(SectionNotFoundError, match="Requested section doesn't exist!"):
            get_criterion_data('2.1', 2, 9, 99)

    def test_subsection_missing(self):
        """Test a missing subsection raises the subsection error."""
        with pytest.raises(SubsectionNotFoundError, match="Requested subsection doesn't exist!"):
            get_criterion_data('2.1', 2, 1, 9)

    def test_wcag20_lacks_later_criteria(self):
        """Test 1.3.4 exists from 2.1 on but not in 2.0."""
        assert get_criterion_data('2.1', 1, 3, 4).id
        with pytest.raises(SubsectionNotFoundError):
            get_criterion_data('2.0', 1, 3, 4)

    def test_wcag20_lacks_guideline_2_5(self):
        """Test guideline 2.5 was introduced in 2.1."""
        with pytest.raises(SectionNotFoundError):
            get_criterion_data('2.0', 2, 5, 1)

    def test_zero_and_negative_coordinates(self):
        """Test coordinates are one-based."""
        with pytest.raises(ChapterNotFoundError):
            get_criterion_data('2.2', 0, 1, 1)
        with pytest.raises(SectionNotFoundError):
            get_criterion_data('2.2', 1, -1, 1)

    def test_boolean_coordinates_rejected(self):
        """Test True is not taken as entry 1 at any level."""
        with pytest.raises(ChapterNotFoundError):
            get_criterion_data('2.1', True, True, True)
        with pytest.raises(SectionNotFoundError):
            get_criterion_data('2.1', 1, True, 1)
        with pytest.raises(SubsectionNotFoundError):
            get_criterion_data('2.1', 1, 1, True)

    def test_boolean_coordinates_rejected_for_links(self):
        """Test links cannot be built from boolean coordinates."""
        with pytest.raises(ChapterNotFoundError):
            get_link_to_criterion('2.2', True, 1, 1)

    def test_errors_carry_coordinates(self):
        """Test the raised error records the requested coordinates."""
        with pytest.raises(SubsectionNotFoundError) as exc_info:
            get_criterion_data('2.2', 2, 1, 42)

        assert (exc_info.value.chapter, exc_info.value.section, exc_info.value.subsection) == (2, 1, 42)

    def test_error_hierarchy(self):
        """Test all criterion errors share catchable bases."""
        for error in (ChapterNotFoundError, SectionNotFoundError, SubsectionNotFoundError):
            assert issubclass(error, CriterionNotFoundError)
            assert issubclass(error, LookupError)
            assert issubclass(error, WCAGReferenceError)


class TestLinkToCriterion:
    """Tests for get_link_to_criterion."""

    def test_documented_example(self):
        """Test the 3.3.4 link in WCAG 2.2."""
        assert (
            get_link_to_criterion('2.2', 3, 3, 4)
            == 'https://www.w3.org/TR/WCAG22/#error-prevention-legal-financial-data'
        )

    def test_link_matches_data(self):
        """Test the link is always the recommendation URL plus the anchor id."""
        for version, chapter, section, subsection in all_coordinates():
            record = get_criterion_data(version, chapter, section, subsection)
            link = get_link_to_criterion(version, chapter, section, subsection)
            assert link == record.wcag_url + '#' + record.id

    def test_errors_propagate(self):
        """Test lookup errors pass through unchanged."""
        with pytest.raises(ChapterNotFoundError):
            get_link_to_criterion('2.0', 7, 1, 1)
        with pytest.raises(SubsectionNotFoundError):
            get_link_to_criterion('2.0', 1, 3, 4)


class TestCriterionByHandle:
    """Tests for dotted-number lookups."""

    def test_dotted_number(self, reference):
        """Test '2.4.7' resolves like (2, 4, 7)."""
        record = reference.get_criterion_by_handle('2.1', '2.4.7')
        assert record == reference.get_criterion_data('2.1', 2, 4, 7)
        assert record.id == 'focus-visible'

    def test_malformed_number(self, reference):
        """Test a malformed number cannot name a chapter."""
        with pytest.raises(ChapterNotFoundError):
            reference.get_criterion_by_handle('2.1', '2.4')

    def test_malformed_number_invalid_version(self, reference):
        """Test version errors still come first."""
        with pytest.raises(InvalidVersionError):
            reference.get_criterion_by_handle('4', 'abc')

    @pytest.mark.parametrize('number,expected', [
        ('2.4.7', (2, 4, 7)),
        (' 1.4.10 ', (1, 4, 10)),
        ('2.4', None),
        ('2.4.x', None),
        ('', None),
    ])
    def test_parse_criterion_number(self, number, expected):
        assert parse_criterion_number(number) == expected


class TestTechniqueData:
    """Tests for get_technique_data."""

    def test_wcag21_technique(self):
        """Test a 2.1 technique carries a group id and no group page."""
        record = get_technique_data('2.1', 'G57')

        assert isinstance(record, TechniqueRecord)
        assert record.text == 'G57: Ordering the content in a meaningful sequence'
        assert record.techniques_url == 'https://www.w3.org/WAI/WCAG21/Techniques/'
        assert record.group_id == 'general'
        assert record.group_page is None

    def test_wcag20_technique(self):
        """Test a 2.0 technique carries a group page and no group id."""
        record = get_technique_data('2.0', 'G57')

        assert record.techniques_url == 'https://www.w3.org/TR/WCAG20-TECHS/'
        assert record.group_id is None
        assert record.group_page == 'general.html'

    def test_multi_letter_prefix(self):
        """Test codes with longer prefixes resolve to their group."""
        record = get_technique_data('2.2', 'ARIA12')
        assert record.text.startswith('ARIA12:')
        assert record.group_id == 'aria'

    def test_wcag20_aria_group(self):
        """Test WCAG 2.0 ARIA techniques resolve through the ARIA prefix."""
        record = get_technique_data('2.0', 'ARIA12')
        assert record.group_page == 'aria.html'

    @pytest.mark.parametrize('version', ['2.0', '2.1', '2.2'])
    def test_unknown_group(self, version):
        """Test an unknown prefix raises the technique error."""
        with pytest.raises(TechniqueNotFoundError, match="Requested WCAG technique doesn't exist!"):
            get_technique_data(version, 'ZZZ99')

    @pytest.mark.parametrize('version', ['2.0', '2.1', '2.2'])
    def test_unknown_code_in_known_group(self, version):
        """Test an unknown code in a known group raises the same error."""
        with pytest.raises(TechniqueNotFoundError):
            get_technique_data(version, 'G9999')

    def test_codes_are_case_sensitive(self):
        """Test lowercase codes do not match."""
        with pytest.raises(TechniqueNotFoundError):
            get_technique_data('2.1', 'g57')

    def test_technique_error_is_lookup_error(self):
        """Test technique errors can be caught as LookupError."""
        with pytest.raises(LookupError):
            get_technique_data('2.1', 'H9999')


class TestLinkToTechnique:
    """Tests for get_link_to_technique."""

    def test_wcag20_link_has_no_group_segment(self):
        """Test 2.0 links point straight at the technique page."""
        assert get_link_to_technique('2.0', 'SCR27') == 'https://www.w3.org/TR/WCAG20-TECHS/SCR27.html'

    def test_wcag21_link_has_group_segment(self):
        """Test 2.1 links nest the technique under its group id."""
        assert (
            get_link_to_technique('2.1', 'G57')
            == 'https://www.w3.org/WAI/WCAG21/Techniques/general/G57.html'
        )

    def test_wcag22_link(self):
        """Test 2.2 links use the 2.2 techniques URL."""
        assert (
            get_link_to_technique('2.2', 'ARIA12')
            == 'https://www.w3.org/WAI/WCAG22/Techniques/aria/ARIA12.html'
        )

    def test_enum_version(self, reference):
        """Test enum versions build the same link shape."""
        assert reference.get_link_to_technique(WCAGVersion.V2_0, 'G57') == (
            'https://www.w3.org/TR/WCAG20-TECHS/G57.html'
        )

    def test_every_technique_links(self):
        """Test every stored technique produces a link of the right shape."""
        for version, data in default_dataset().items():
            for group in data.technique_groups.values():
                for code in group.techniques:
                    link = get_link_to_technique(version.value, code)
                    if version is WCAGVersion.V2_0:
                        assert link == data.techniques_url + code + '.html'
                    else:
                        assert link == f"{data.techniques_url}{group.id}/{code}.html"

    def test_errors_propagate(self):
        """Test technique errors pass through unchanged."""
        with pytest.raises(TechniqueNotFoundError):
            get_link_to_technique('2.2', 'ZZZ99')


class TestTechniquePrefix:
    """Tests for technique_prefix."""

    @pytest.mark.parametrize('code,prefix', [
        ('G57', 'G'),
        ('ARIA12', 'ARIA'),
        ('SCR27', 'SCR'),
        ('FLASH1', 'FLASH'),
        ('ZZZ', 'ZZZ'),
        ('123', ''),
    ])
    def test_strips_digits(self, code, prefix):
        assert technique_prefix(code) == prefix
