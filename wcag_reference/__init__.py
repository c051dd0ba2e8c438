"""
WCAG Reference

Structured, versioned lookups into the W3C Web Content Accessibility
Guidelines (WCAG 2.0, 2.1 and 2.2).

Features:
- Success criteria by version and number (chapter.section.subsection)
- Techniques by version and code (G57, ARIA12, SCR27, ...)
- Direct links to the recommendation and to technique documents
- Conformance levels as 1 (A), 2 (AA) and 3 (AAA)
- Bundled, read-only dataset generated offline from the W3C pages

Usage:
    >>> from wcag_reference import get_criterion_data, get_link_to_technique
    >>> get_criterion_data('2.1', 2, 1, 1).handle
    '2.1.1 Keyboard'
    >>> get_link_to_technique('2.1', 'G57')
    'https://www.w3.org/WAI/WCAG21/Techniques/general/G57.html'
"""

from functools import lru_cache

from .exceptions import (
    WCAGReferenceError,
    InvalidVersionError,
    CriterionNotFoundError,
    ChapterNotFoundError,
    SectionNotFoundError,
    SubsectionNotFoundError,
    TechniqueNotFoundError,
    DatasetError,
)

from .models import (
    WCAGVersion,
    ConformanceLevel,
    CriterionRecord,
    TechniqueRecord,
)

from .dataset import load_dataset, default_dataset
from .reference import WCAGReference

__version__ = '1.0.0'
__all__ = [
    # Lookups
    'get_criterion_data',
    'get_link_to_criterion',
    'get_technique_data',
    'get_link_to_technique',
    'default_reference',
    'WCAGReference',
    # Data
    'load_dataset',
    'default_dataset',
    'WCAGVersion',
    'ConformanceLevel',
    'CriterionRecord',
    'TechniqueRecord',
    # Errors
    'WCAGReferenceError',
    'InvalidVersionError',
    'CriterionNotFoundError',
    'ChapterNotFoundError',
    'SectionNotFoundError',
    'SubsectionNotFoundError',
    'TechniqueNotFoundError',
    'DatasetError',
]


@lru_cache(maxsize=None)
def default_reference() -> WCAGReference:
    """WCAGReference over the bundled dataset, built on first use."""
    return WCAGReference(default_dataset())


def get_criterion_data(version: str, chapter: int, section: int, subsection: int) -> CriterionRecord:
    """
    Return all available data for a success criterion.

    Example:
        >>> get_criterion_data('2.1', 2, 1, 1).to_dict()['wcagUrl']
        'https://www.w3.org/TR/WCAG21/'
    """
    return default_reference().get_criterion_data(version, chapter, section, subsection)


def get_link_to_criterion(version: str, chapter: int, section: int, subsection: int) -> str:
    """
    Return a link with an anchor pointing to the criterion.

    Example:
        >>> get_link_to_criterion('2.2', 3, 3, 4)
        'https://www.w3.org/TR/WCAG22/#error-prevention-legal-financial-data'
    """
    return default_reference().get_link_to_criterion(version, chapter, section, subsection)


def get_technique_data(version: str, technique: str) -> TechniqueRecord:
    """
    Return all available data for a technique.

    Example:
        >>> get_technique_data('2.0', 'G57').group_page
        'general.html'
    """
    return default_reference().get_technique_data(version, technique)


def get_link_to_technique(version: str, technique: str) -> str:
    """
    Return a link to the technique's documentation page.

    Example:
        >>> get_link_to_technique('2.0', 'SCR27')
        'https://www.w3.org/TR/WCAG20-TECHS/SCR27.html'
    """
    return default_reference().get_link_to_technique(version, technique)
