"""
Data model for the WCAG reference dataset.

The dataset is a four level hierarchy per WCAG version:

    principle (chapter) -> guideline (section) -> success criterion (subsection)

plus a flat catalogue of technique groups keyed by code prefix
("G", "H", "ARIA", ...). All stored records are frozen and their nested
mappings are read-only, so one loaded dataset can be shared freely.

Lookups never hand out stored records. They build a CriterionRecord or
TechniqueRecord that merges the stored fields with the derived URLs.
"""

import json
from dataclasses import dataclass, asdict
from enum import Enum, IntEnum
from typing import Any, Dict, Mapping, Optional


class WCAGVersion(str, Enum):
    """Supported WCAG recommendation versions."""
    V2_0 = "2.0"
    V2_1 = "2.1"
    V2_2 = "2.2"

    @property
    def partition(self) -> str:
        """Dataset partition key, e.g. 'wcag21'."""
        return "wcag" + self.value.replace(".", "")


class ConformanceLevel(IntEnum):
    """Conformance levels, stored by their numeric form."""
    A = 1
    AA = 2
    AAA = 3


@dataclass(frozen=True)
class SuccessCriterion:
    """A single testable success criterion, e.g. 2.1.1 Keyboard."""
    id: str
    handle: str
    quick_reference: str
    detailed_reference: str
    level: int


@dataclass(frozen=True)
class Guideline:
    """A guideline with its success criteria keyed by subsection number."""
    id: str
    text: str
    success_criteria: Mapping[int, SuccessCriterion]
    detailed_reference: Optional[str] = None


@dataclass(frozen=True)
class Principle:
    """A top level principle with its guidelines keyed by section number."""
    id: str
    text: str
    guidelines: Mapping[int, Guideline]


@dataclass(frozen=True)
class Technique:
    code: str
    text: str


@dataclass(frozen=True)
class TechniqueGroup:
    """
    Techniques of one technology, keyed by full technique code.

    WCAG 2.0 groups carry ``one_page`` (the group's single page file name)
    while 2.1 and 2.2 groups carry ``id`` (the URL path segment). Only one
    of the two is set for a given version.
    """
    key: str
    text: str
    techniques: Mapping[str, Technique]
    id: Optional[str] = None
    one_page: Optional[str] = None


@dataclass(frozen=True)
class VersionDataset:
    """All reference data for one WCAG version."""
    version: WCAGVersion
    url: str
    principles: Mapping[int, Principle]
    techniques_url: str
    technique_groups: Mapping[str, TechniqueGroup]


@dataclass(frozen=True)
class CriterionRecord:
    """Success criterion merged with the URL of its recommendation."""
    id: str
    handle: str
    quick_reference: str
    detailed_reference: str
    level: int
    wcag_url: str

    @property
    def conformance_level(self) -> ConformanceLevel:
        return ConformanceLevel(self.level)

    def to_dict(self) -> Dict[str, Any]:
        """Export with the public camelCase field names."""
        return {
            'id': self.id,
            'handle': self.handle,
            'quickReference': self.quick_reference,
            'detailedReference': self.detailed_reference,
            'level': self.level,
            'wcagUrl': self.wcag_url,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def to_text(self) -> str:
        """Generate human-readable summary"""
        return "\n".join([
            f"{self.handle} (Level {self.conformance_level.name})",
            f"  Anchor:    {self.id}",
            f"  WCAG:      {self.wcag_url}",
            f"  Quickref:  {self.quick_reference}",
            f"  Understanding: {self.detailed_reference}",
        ])


@dataclass(frozen=True)
class TechniqueRecord:
    """
    Technique merged with the derived fields of its group.

    ``group_id`` is set for WCAG 2.1/2.2 and ``group_page`` for WCAG 2.0;
    the divergence mirrors the published technique documents.
    """
    text: str
    techniques_url: str
    group_id: Optional[str] = None
    group_page: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Export with the public camelCase field names."""
        data = asdict(self)
        return {
            'text': data['text'],
            'techniquesUrl': data['techniques_url'],
            'groupId': data['group_id'],
            'groupPage': data['group_page'],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def to_text(self) -> str:
        """Generate human-readable summary"""
        lines = [
            self.text,
            f"  Techniques: {self.techniques_url}",
        ]
        if self.group_id:
            lines.append(f"  Group:      {self.group_id}")
        if self.group_page:
            lines.append(f"  Group page: {self.group_page}")
        return "\n".join(lines)
