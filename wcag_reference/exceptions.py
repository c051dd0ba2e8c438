"""
Exceptions raised by the WCAG reference lookups.

Every failure surfaces synchronously as one of the classes below. Lookup
failures are terminal for the call; nothing is retried or partially
returned.
"""

from typing import Optional


class WCAGReferenceError(Exception):
    """Base exception for all WCAG reference failures."""
    pass


class InvalidVersionError(WCAGReferenceError, ValueError):
    """Requested WCAG version is not one of 2.0, 2.1 or 2.2."""

    def __init__(self, version=None):
        self.version = version
        super().__init__("Requested WCAG Version isn't valid!")


class CriterionNotFoundError(WCAGReferenceError, LookupError):
    """A success criterion could not be resolved."""

    message = "Requested success criterion doesn't exist!"

    def __init__(
        self,
        chapter: Optional[int] = None,
        section: Optional[int] = None,
        subsection: Optional[int] = None,
    ):
        self.chapter = chapter
        self.section = section
        self.subsection = subsection
        super().__init__(self.message)


class ChapterNotFoundError(CriterionNotFoundError):
    """No principle exists for the requested chapter."""
    message = "Requested chapter doesn't exist!"


class SectionNotFoundError(CriterionNotFoundError):
    """No guideline exists for the requested section."""
    message = "Requested section doesn't exist!"


class SubsectionNotFoundError(CriterionNotFoundError):
    """No success criterion exists for the requested subsection."""
    message = "Requested subsection doesn't exist!"


class TechniqueNotFoundError(WCAGReferenceError, LookupError):
    """Unknown technique group or unknown technique within a group."""

    def __init__(self, technique=None):
        self.technique = technique
        super().__init__("Requested WCAG technique doesn't exist!")


class DatasetError(WCAGReferenceError):
    """Reference dataset is missing or malformed."""
    pass
