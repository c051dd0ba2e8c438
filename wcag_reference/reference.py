"""
Lookups of WCAG success criteria and techniques.

Usage:
    from wcag_reference.reference import WCAGReference

    reference = WCAGReference()
    reference.get_criterion_data('2.1', 2, 1, 1).handle
    # -> '2.1.1 Keyboard'
    reference.get_link_to_technique('2.0', 'SCR27')
    # -> 'https://www.w3.org/TR/WCAG20-TECHS/SCR27.html'
"""

import logging
import re
from typing import Optional, Tuple, Union

from .dataset import ReferenceDataset, default_dataset
from .exceptions import (
    ChapterNotFoundError,
    InvalidVersionError,
    SectionNotFoundError,
    SubsectionNotFoundError,
    TechniqueNotFoundError,
)
from .models import CriterionRecord, TechniqueRecord, VersionDataset, WCAGVersion

logger = logging.getLogger(__name__)

VersionLike = Union[str, WCAGVersion]

CRITERION_NUMBER_PATTERN = re.compile(r'^(\d+)\.(\d+)\.(\d+)$')


def technique_prefix(technique: str) -> str:
    """Group prefix of a technique code, e.g. 'ARIA12' -> 'ARIA'."""
    return re.sub(r'\d', '', technique)


def parse_criterion_number(number: str) -> Optional[Tuple[int, int, int]]:
    """Split a dotted criterion number, e.g. '2.4.7' -> (2, 4, 7); None if malformed."""
    match = CRITERION_NUMBER_PATTERN.match(number.strip())
    if not match:
        return None
    chapter, section, subsection = (int(part) for part in match.groups())
    return chapter, section, subsection


def _is_number(value) -> bool:
    # bool is an int subclass and True would otherwise find entry 1
    return isinstance(value, int) and not isinstance(value, bool)


class WCAGReference:
    """
    Accessor for a loaded reference dataset.

    The dataset is injected at construction and never modified; every call
    returns a newly built record.
    """

    def __init__(self, dataset: Optional[ReferenceDataset] = None):
        """
        Args:
            dataset: Mapping from WCAGVersion to VersionDataset
                (default: the bundled dataset)
        """
        self.dataset = dataset if dataset is not None else default_dataset()

    def resolve_version(self, version: VersionLike) -> VersionDataset:
        """
        Map a version identifier to its dataset partition.

        Only a WCAGVersion member or one of the exact strings '2.0', '2.1'
        and '2.2' is accepted; '2', 2.1 or '2.10' are rejected.

        Raises:
            InvalidVersionError: If the version is not recognised
        """
        if not isinstance(version, str):
            raise InvalidVersionError(version)
        try:
            resolved = WCAGVersion(version)
        except ValueError:
            raise InvalidVersionError(version)

        if resolved not in self.dataset:
            raise InvalidVersionError(version)
        return self.dataset[resolved]

    def get_criterion_data(
        self,
        version: VersionLike,
        chapter: int,
        section: int,
        subsection: int,
    ) -> CriterionRecord:
        """
        Return all available data for a success criterion.

        Existence is checked level by level (chapter, section, subsection)
        and the first missing level raises its own error.

        Args:
            version: '2.0', '2.1' or '2.2'
            chapter: Principle number
            section: Guideline number within the principle
            subsection: Success criterion number within the guideline

        Returns:
            CriterionRecord with the recommendation URL attached

        Example:
            >>> WCAGReference().get_criterion_data('2.1', 2, 1, 1).id
            'keyboard'
        """
        data = self.resolve_version(version)

        principle = data.principles.get(chapter) if _is_number(chapter) else None
        if principle is None:
            raise ChapterNotFoundError(chapter, section, subsection)

        guideline = principle.guidelines.get(section) if _is_number(section) else None
        if guideline is None:
            raise SectionNotFoundError(chapter, section, subsection)

        criterion = guideline.success_criteria.get(subsection) if _is_number(subsection) else None
        if criterion is None:
            raise SubsectionNotFoundError(chapter, section, subsection)

        logger.debug(f"WCAG {data.version.value} criterion {criterion.handle}")
        return CriterionRecord(
            id=criterion.id,
            handle=criterion.handle,
            quick_reference=criterion.quick_reference,
            detailed_reference=criterion.detailed_reference,
            level=criterion.level,
            wcag_url=data.url,
        )

    def get_link_to_criterion(
        self,
        version: VersionLike,
        chapter: int,
        section: int,
        subsection: int,
    ) -> str:
        """
        Return a link with an anchor pointing to the criterion.

        Example:
            >>> WCAGReference().get_link_to_criterion('2.2', 3, 3, 4)
            'https://www.w3.org/TR/WCAG22/#error-prevention-legal-financial-data'
        """
        record = self.get_criterion_data(version, chapter, section, subsection)
        return record.wcag_url + '#' + record.id

    def get_criterion_by_handle(self, version: VersionLike, number: str) -> CriterionRecord:
        """
        Look up a criterion by its dotted number, e.g. '2.4.7'.

        A string that is not three dot separated numbers cannot name any
        principle and raises ChapterNotFoundError.
        """
        coordinates = parse_criterion_number(number)
        if coordinates is None:
            self.resolve_version(version)
            raise ChapterNotFoundError()

        return self.get_criterion_data(version, *coordinates)

    def get_technique_data(self, version: VersionLike, technique: str) -> TechniqueRecord:
        """
        Return all available data for a technique.

        An unknown group prefix and an unknown code within a known group
        both raise TechniqueNotFoundError.

        Example:
            >>> WCAGReference().get_technique_data('2.1', 'G57').group_id
            'general'
        """
        data = self.resolve_version(version)

        group = data.technique_groups.get(technique_prefix(technique))
        if group is None or technique not in group.techniques:
            raise TechniqueNotFoundError(technique)

        logger.debug(f"WCAG {data.version.value} technique {technique} in group {group.key}")
        return TechniqueRecord(
            text=group.techniques[technique].text,
            techniques_url=data.techniques_url,
            group_id=group.id,
            group_page=group.one_page,
        )

    def get_link_to_technique(self, version: VersionLike, technique: str) -> str:
        """
        Return a link to the technique's documentation page.

        WCAG 2.0 techniques live directly under the techniques URL; 2.1 and
        2.2 techniques are nested under their group id.

        Example:
            >>> WCAGReference().get_link_to_technique('2.1', 'G57')
            'https://www.w3.org/WAI/WCAG21/Techniques/general/G57.html'
        """
        record = self.get_technique_data(version, technique)

        section = ''
        if WCAGVersion(version) is not WCAGVersion.V2_0:
            section = record.group_id + '/'

        return record.techniques_url + section + technique + '.html'
