"""
Loader for the bundled WCAG reference dataset.

Each WCAG version ships as one JSON document under ``wcag_reference/data``
in the shape produced by the generator:

    {
      "informations": {"url": ..., "1": {principle}, "2": ..., ...},
      "techniques":   {"url": ..., "G": {group}, "H": ..., ...}
    }

Numeric string keys become integers and every nested mapping is wrapped
read-only. Loading is the only place the dataset can fail; lookups
afterwards work purely in memory.
"""

import json
import logging
import os
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from .exceptions import DatasetError
from .models import (
    Guideline,
    Principle,
    SuccessCriterion,
    Technique,
    TechniqueGroup,
    VersionDataset,
    WCAGVersion,
)

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / 'data'
DATA_DIR_ENV = 'WCAG_REFERENCE_DATA_DIR'

ReferenceDataset = Mapping[WCAGVersion, VersionDataset]


def resolve_data_dir(data_dir: Optional[Union[str, Path]] = None) -> Path:
    """Explicit directory, then $WCAG_REFERENCE_DATA_DIR, then the bundled data."""
    if data_dir is not None:
        return Path(data_dir)
    env_dir = os.environ.get(DATA_DIR_ENV)
    if env_dir:
        return Path(env_dir)
    return DATA_DIR


def _require(node: Dict[str, Any], key: str, path: str) -> Any:
    if not isinstance(node, dict) or key not in node:
        raise DatasetError(f"Missing field '{key}' at {path}")
    return node[key]


def _numbered(node: Dict[str, Any], path: str) -> Dict[int, Any]:
    """Convert the "1", "2", ... keys of a node to integers, skipping 'url'."""
    if not isinstance(node, dict):
        raise DatasetError(f"Expected an object at {path}")

    numbered = {}
    for key, value in node.items():
        if key == 'url':
            continue
        if not key.isdigit() or int(key) < 1:
            raise DatasetError(f"Invalid key '{key}' at {path}")
        numbered[int(key)] = value
    return numbered


def _parse_criterion(raw: Dict[str, Any], path: str) -> SuccessCriterion:
    level = _require(raw, 'level', path)
    if level not in (1, 2, 3):
        raise DatasetError(f"Invalid conformance level {level!r} at {path}")

    return SuccessCriterion(
        id=_require(raw, 'id', path),
        handle=_require(raw, 'handle', path),
        quick_reference=_require(raw, 'quickReference', path),
        detailed_reference=_require(raw, 'detailedReference', path),
        level=level,
    )


def _parse_guideline(raw: Dict[str, Any], path: str) -> Guideline:
    criteria_path = f"{path}.successCriterions"
    criteria = {
        number: _parse_criterion(entry, f"{criteria_path}.{number}")
        for number, entry in _numbered(_require(raw, 'successCriterions', path), criteria_path).items()
    }
    return Guideline(
        id=_require(raw, 'id', path),
        text=_require(raw, 'text', path),
        success_criteria=MappingProxyType(criteria),
        detailed_reference=raw.get('detailedReference'),
    )


def _parse_principle(raw: Dict[str, Any], path: str) -> Principle:
    guidelines_path = f"{path}.guidelines"
    guidelines = {
        number: _parse_guideline(entry, f"{guidelines_path}.{number}")
        for number, entry in _numbered(_require(raw, 'guidelines', path), guidelines_path).items()
    }
    return Principle(
        id=_require(raw, 'id', path),
        text=_require(raw, 'text', path),
        guidelines=MappingProxyType(guidelines),
    )


def _parse_technique_group(
    version: WCAGVersion,
    key: str,
    raw: Dict[str, Any],
    path: str,
) -> TechniqueGroup:
    if not isinstance(raw, dict):
        raise DatasetError(f"Expected an object at {path}")
    raw_techniques = _require(raw, 'techniques', path)
    if not isinstance(raw_techniques, dict):
        raise DatasetError(f"Expected an object at {path}.techniques")

    # 2.0 groups live on one page each; later groups are addressed by id.
    if version is WCAGVersion.V2_0:
        group_id, one_page = raw.get('id'), _require(raw, 'onePage', path)
    else:
        group_id, one_page = _require(raw, 'id', path), raw.get('onePage')

    techniques = {
        code: Technique(code=code, text=_require(entry, 'text', f"{path}.techniques.{code}"))
        for code, entry in raw_techniques.items()
    }
    return TechniqueGroup(
        key=key,
        text=_require(raw, 'text', path),
        techniques=MappingProxyType(techniques),
        id=group_id,
        one_page=one_page,
    )


def parse_version(version: WCAGVersion, raw: Dict[str, Any]) -> VersionDataset:
    """
    Build a VersionDataset from the generated JSON structure.

    Args:
        version: WCAG version the data belongs to
        raw: Decoded JSON document for that version

    Returns:
        Immutable VersionDataset

    Raises:
        DatasetError: If a required field is missing or malformed
    """
    root = version.partition
    informations = _require(raw, 'informations', root)
    techniques = _require(raw, 'techniques', root)
    for name, node in (('informations', informations), ('techniques', techniques)):
        if not isinstance(node, dict):
            raise DatasetError(f"Expected an object at {root}.{name}")

    principles_path = f"{root}.informations"
    principles = {
        number: _parse_principle(entry, f"{principles_path}.{number}")
        for number, entry in _numbered(informations, principles_path).items()
    }

    groups = {
        key: _parse_technique_group(version, key, entry, f"{root}.techniques.{key}")
        for key, entry in techniques.items()
        if key != 'url'
    }

    return VersionDataset(
        version=version,
        url=_require(informations, 'url', principles_path),
        principles=MappingProxyType(principles),
        techniques_url=_require(techniques, 'url', f"{root}.techniques"),
        technique_groups=MappingProxyType(groups),
    )


def load_version(
    version: WCAGVersion,
    data_dir: Optional[Union[str, Path]] = None,
) -> VersionDataset:
    """Load and parse the JSON document of a single version."""
    path = resolve_data_dir(data_dir) / f"{version.partition}.json"

    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except FileNotFoundError:
        raise DatasetError(f"Dataset file not found: {path}")
    except json.JSONDecodeError as e:
        raise DatasetError(f"Dataset file is not valid JSON: {path} ({e})")

    dataset = parse_version(version, raw)
    logger.debug(
        f"Loaded WCAG {version.value} from {path}: "
        f"{len(dataset.principles)} principles, "
        f"{len(dataset.technique_groups)} technique groups"
    )
    return dataset


def load_dataset(data_dir: Optional[Union[str, Path]] = None) -> ReferenceDataset:
    """
    Load the reference data of every supported WCAG version.

    Args:
        data_dir: Directory holding wcag20.json, wcag21.json and wcag22.json
            (default: $WCAG_REFERENCE_DATA_DIR or the bundled data)

    Returns:
        Read-only mapping from WCAGVersion to VersionDataset
    """
    return MappingProxyType({
        version: load_version(version, data_dir)
        for version in WCAGVersion
    })


@lru_cache(maxsize=None)
def default_dataset() -> ReferenceDataset:
    """The process-wide dataset, loaded on first use."""
    return load_dataset()
