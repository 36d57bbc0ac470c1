"""Record parser: decodes one content file into a typed record.

Legacy pages are YAML mappings, modules are JSON documents.  Both
decoders are pure: they never touch the file system and never stamp
route information, which is the walker's job.
"""

import json
from enum import Enum
from typing import Any, Union

import yaml
from pydantic import ValidationError

from docsite.errors import DecodeFailure
from docsite.models.module import Module
from docsite.models.page import LegacyPage

# Fields owned by the engine; a content file cannot set them
_STAMPED_FIELDS = {
    "resource_path",
    "source_path",
    "name",
    "extension_base_applied",
}


class RecordFormat(str, Enum):
    LEGACY = "legacy"
    MODULE = "module"


def _as_mapping(document: Any, path: str) -> dict:
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise DecodeFailure(path, f"expected a mapping at top level, got {type(document).__name__}")
    return {key: value for key, value in document.items() if key not in _STAMPED_FIELDS}


def _decode_text(data: bytes, path: str) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeFailure(path, exc) from exc


def parse_legacy(data: bytes, path: str) -> LegacyPage:
    """Decode YAML *data* into a :class:`LegacyPage`.

    Raises:
        DecodeFailure: malformed YAML, a non-mapping document, or fields
            of the wrong shape.
    """
    text = _decode_text(data, path)
    try:
        # BaseLoader keeps every scalar as authored text (no dates, no yes->True)
        document = yaml.load(text, Loader=yaml.BaseLoader)
    except yaml.YAMLError as exc:
        raise DecodeFailure(path, exc) from exc

    try:
        return LegacyPage.model_validate(_as_mapping(document, path))
    except ValidationError as exc:
        raise DecodeFailure(path, exc) from exc


def parse_module(data: bytes, path: str) -> Module:
    """Decode JSON *data* into a :class:`Module`.

    Raises:
        DecodeFailure: malformed JSON, a non-object document, or fields of
            the wrong shape.
    """
    text = _decode_text(data, path)
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeFailure(path, exc) from exc

    if document is None:
        raise DecodeFailure(path, "expected a JSON object, got null")

    try:
        return Module.model_validate(_as_mapping(document, path))
    except ValidationError as exc:
        raise DecodeFailure(path, exc) from exc


def parse_record(data: bytes, path: str, fmt: RecordFormat) -> Union[LegacyPage, Module]:
    if fmt is RecordFormat.LEGACY:
        return parse_legacy(data, path)
    return parse_module(data, path)
