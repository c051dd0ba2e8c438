"""
Offline builder for the WCAG reference dataset.

Parses locally saved copies of the W3C recommendation and techniques
index pages and produces the JSON documents bundled under
``wcag_reference/data``. Nothing is downloaded; save the pages first:

    WCAG 2.0: https://www.w3.org/TR/WCAG20/
              https://www.w3.org/TR/WCAG20-TECHS/
    WCAG 2.1: https://www.w3.org/TR/WCAG21/
              https://www.w3.org/WAI/WCAG21/Techniques/
    WCAG 2.2: https://www.w3.org/TR/WCAG22/
              https://www.w3.org/WAI/WCAG22/Techniques/

Usage:
    from wcag_reference.generator import generate_version, write_dataset

    partition = generate_version('2.2', 'WCAG22.html', 'Techniques22.html')
    write_dataset(partition, 'wcag_reference/data/wcag22.json')
"""

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from .exceptions import DatasetError, InvalidVersionError
from .models import WCAGVersion
from .reference import technique_prefix

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class SourcePages:
    """Published URLs of the pages a version is generated from."""
    guidelines_url: str
    techniques_url: str


SOURCE_PAGES = {
    WCAGVersion.V2_0: SourcePages(
        guidelines_url='https://www.w3.org/TR/WCAG20/',
        techniques_url='https://www.w3.org/TR/WCAG20-TECHS/',
    ),
    WCAGVersion.V2_1: SourcePages(
        guidelines_url='https://www.w3.org/TR/WCAG21/',
        techniques_url='https://www.w3.org/WAI/WCAG21/Techniques/',
    ),
    WCAGVersion.V2_2: SourcePages(
        guidelines_url='https://www.w3.org/TR/WCAG22/',
        techniques_url='https://www.w3.org/WAI/WCAG22/Techniques/',
    ),
}

TECHNIQUE_CODE_PATTERN = re.compile(r'^(\w+):')
LEVEL_PATTERN = re.compile(r'Level (A{1,3})\b')
SUBSECTION_PATTERN = re.compile(r'^\d+\.\d+\.(\d+)')
GUIDELINE_PATTERN = re.compile(r'Guideline \d+\.(\d+)')
PRINCIPLE_PATTERN = re.compile(r'Principle (\d+)')


# =============================================================================
# Text helpers
# =============================================================================

def get_inner_text(node) -> str:
    """Text content of a node with whitespace runs collapsed."""
    if node is None:
        return ''
    text = node.get_text() if isinstance(node, Tag) else str(node)
    return re.sub(r'\s+', ' ', text).strip()


def merge_heading(container: Tag, heading: str, paragraph: str) -> str:
    """Heading text (section signs turned into ': ') followed by the paragraph."""
    heading_text = re.sub(r' ?§', ': ', get_inner_text(container.find(heading)))
    return heading_text + get_inner_text(container.find(paragraph))


def join_heading(container: Tag, heading: str, paragraph: str) -> str:
    return get_inner_text(container.find(heading)) + ': ' + get_inner_text(container.find(paragraph))


def success_criterion_text(criterion_node: Tag) -> str:
    """Handle of a 2.1/2.2 criterion, e.g. '2.1.1 Keyboard'."""
    text = get_inner_text(criterion_node.find('h4'))
    return text.replace('Success Criterion ', '').replace('§', '').strip()


def conformance_level(text: str, where: str) -> int:
    match = LEVEL_PATTERN.search(text)
    if not match:
        raise DatasetError(f"No conformance level found for {where}")
    return len(match.group(1))


def _number(pattern: re.Pattern, text: str, where: str) -> str:
    match = pattern.search(text)
    if not match:
        raise DatasetError(f"Cannot number {where}: {text[:60]!r}")
    return match.group(1)


def _href(node: Optional[Tag], base_url: str, where: str) -> str:
    if node is None or not node.get('href'):
        raise DatasetError(f"Missing link for {where}")
    return urljoin(base_url, node['href'])


def _attr(node: Optional[Tag], name: str, where: str) -> str:
    if node is None or not node.get(name):
        raise DatasetError(f"Missing '{name}' attribute for {where}")
    return node[name]


def _parse_techniques_list(list_node: Tag) -> Dict[str, Dict[str, str]]:
    techniques = {}
    for item in list_node.find_all('li'):
        text = get_inner_text(item)
        match = TECHNIQUE_CODE_PATTERN.match(text)
        if not match:
            continue
        techniques[match.group(1)] = {'text': text}
    return techniques


def _group_key(techniques: Dict[str, Dict[str, str]]) -> str:
    # Groups are keyed by the prefix of their codes so that lookups by
    # digit-stripped code always land in the right group.
    return technique_prefix(next(iter(techniques)))


# =============================================================================
# WCAG 2.0
# =============================================================================

def parse_wcag20_informations(html: str, url: str) -> Dict[str, Any]:
    """Extract principles, guidelines and success criteria from the WCAG 2.0 page."""
    soup = BeautifulSoup(html, 'html.parser')
    informations: Dict[str, Any] = {'url': url}

    for node in soup.select('.principle'):
        container = node.parent
        principle = {
            'id': _attr(node.find('a'), 'id', get_inner_text(node)[:40]),
            'text': get_inner_text(node),
            'guidelines': {},
        }

        for guideline_node in container.select('.guideline'):
            guideline_container = guideline_node.parent
            guideline = {
                'id': _attr(guideline_node.find('a'), 'id', get_inner_text(guideline_node)[:40]),
                'text': get_inner_text(guideline_node.find('h3')),
            }
            guideline['detailedReference'] = _href(
                guideline_node.select_one('a[href*="w3.org"]'), url, guideline['id']
            )
            guideline['successCriterions'] = {}

            for criterion_node in guideline_container.select('.sc'):
                criterion_id = _attr(criterion_node, 'id', 'success criterion')
                handle = get_inner_text(criterion_node.select_one('.sc-handle')).replace(':', '', 1)
                criterion = {
                    'id': criterion_id,
                    'handle': handle,
                    'quickReference': _href(
                        criterion_node.select_one('a[href*="quickref"]'), url, criterion_id
                    ),
                    'detailedReference': _href(
                        criterion_node.select_one('a[href*="UNDERSTANDING-WCAG20"]'), url, criterion_id
                    ),
                    'level': conformance_level(
                        get_inner_text(criterion_node.select_one('.sctxt')), criterion_id
                    ),
                }
                number = _number(SUBSECTION_PATTERN, handle, criterion_id)
                guideline['successCriterions'][number] = criterion

            number = _number(GUIDELINE_PATTERN, guideline['text'], guideline['id'])
            principle['guidelines'][number] = guideline

        informations[_number(PRINCIPLE_PATTERN, principle['text'], principle['id'])] = principle

    return informations


def parse_wcag20_techniques(html: str, url: str) -> Dict[str, Any]:
    """Extract technique groups from the WCAG 2.0 techniques table of contents."""
    soup = BeautifulSoup(html, 'html.parser')
    groups: Dict[str, Any] = {'url': url}

    for list_node in soup.select('.toc li > ul'):
        group_node = list_node.parent
        techniques = _parse_techniques_list(list_node)
        if not techniques:
            continue

        groups[_group_key(techniques)] = {
            'text': get_inner_text(group_node.contents[0]),
            'onePage': _attr(group_node.find('a'), 'href', get_inner_text(group_node.contents[0])),
            'techniques': techniques,
        }

    return groups


# =============================================================================
# WCAG 2.1 / 2.2
# =============================================================================

def parse_wcag2x_informations(html: str, url: str, version: WCAGVersion) -> Dict[str, Any]:
    """
    Extract principles, guidelines and success criteria from a 2.1/2.2 page.

    The 2.1 page links quick reference and Understanding documents from each
    criterion; for 2.2 both URLs are derived from the criterion id.
    """
    soup = BeautifulSoup(html, 'html.parser')
    short = version.value.replace('.', '')
    heading_text = merge_heading if version is WCAGVersion.V2_1 else join_heading
    informations: Dict[str, Any] = {'url': url}

    for principle_node in soup.select('.principle'):
        principle = {
            'id': _attr(principle_node, 'id', 'principle'),
            'text': heading_text(principle_node, 'h2', 'p'),
            'guidelines': {},
        }

        for guideline_node in principle_node.select('.guideline'):
            guideline = {
                'id': _attr(guideline_node, 'id', 'guideline'),
                'text': heading_text(guideline_node, 'h3', 'p'),
                'successCriterions': {},
            }

            for criterion_node in guideline_node.select('.sc'):
                criterion_id = _attr(criterion_node, 'id', 'success criterion')
                handle = success_criterion_text(criterion_node)

                if version is WCAGVersion.V2_1:
                    quick_reference = _href(
                        criterion_node.select_one(f'a[href*="WCAG{short}/quickref"]'), url, criterion_id
                    )
                    detailed_reference = _href(
                        criterion_node.select_one(f'a[href*="WCAG{short}/Understanding"]'), url, criterion_id
                    )
                else:
                    quick_reference = f'https://www.w3.org/WAI/WCAG{short}/quickref/#{criterion_id}'
                    detailed_reference = f'https://www.w3.org/WAI/WCAG{short}/Understanding/{criterion_id}'

                guideline['successCriterions'][_number(SUBSECTION_PATTERN, handle, criterion_id)] = {
                    'id': criterion_id,
                    'handle': handle,
                    'quickReference': quick_reference,
                    'detailedReference': detailed_reference,
                    'level': conformance_level(
                        get_inner_text(criterion_node.select_one('.conformance-level')), criterion_id
                    ),
                }

            number = _number(GUIDELINE_PATTERN, guideline['text'], guideline['id'])
            principle['guidelines'][number] = guideline

        secno = re.sub(r'\D', '', get_inner_text(principle_node.select_one('h2 .secno')))
        if not secno:
            raise DatasetError(f"Cannot number principle {principle['id']}")
        informations[secno] = principle

    return informations


def parse_wcag2x_techniques(html: str, url: str) -> Dict[str, Any]:
    """Extract technique groups from a 2.1/2.2 techniques index."""
    soup = BeautifulSoup(html, 'html.parser')
    groups: Dict[str, Any] = {'url': url}

    for heading in soup.select('#toc h3'):
        list_node = heading.find_next_sibling()
        if list_node is None:
            continue
        techniques = _parse_techniques_list(list_node)
        if not techniques:
            continue

        groups[_group_key(techniques)] = {
            'id': _attr(heading, 'id', get_inner_text(heading)),
            'text': get_inner_text(heading).replace('§', '').strip(),
            'techniques': techniques,
        }

    return groups


# =============================================================================
# Entry points
# =============================================================================

def generate_version(
    version: Union[str, WCAGVersion],
    guidelines_html: Union[str, Path],
    techniques_html: Union[str, Path],
) -> Dict[str, Any]:
    """
    Build the dataset partition of one version from saved HTML files.

    Args:
        version: '2.0', '2.1' or '2.2'
        guidelines_html: Saved copy of the recommendation page
        techniques_html: Saved copy of the techniques index page

    Returns:
        JSON-ready dict with 'informations' and 'techniques'
    """
    try:
        version = WCAGVersion(version)
    except ValueError:
        raise InvalidVersionError(version)

    pages = SOURCE_PAGES[version]
    guidelines = Path(guidelines_html).read_text(encoding='utf-8')
    techniques = Path(techniques_html).read_text(encoding='utf-8')

    if version is WCAGVersion.V2_0:
        informations = parse_wcag20_informations(guidelines, pages.guidelines_url)
        groups = parse_wcag20_techniques(techniques, pages.techniques_url)
    else:
        informations = parse_wcag2x_informations(guidelines, pages.guidelines_url, version)
        groups = parse_wcag2x_techniques(techniques, pages.techniques_url)

    logger.info(
        f"WCAG {version.value}: {len(informations) - 1} principles, "
        f"{len(groups) - 1} technique groups"
    )
    return {'informations': informations, 'techniques': groups}


def write_dataset(partition: Dict[str, Any], output_path: Union[str, Path]) -> Path:
    """Write a generated partition as indented JSON."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(partition, f, indent=2, ensure_ascii=False)
        f.write('\n')

    logger.info(f"Dataset written to: {output_path}")
    return output_path
