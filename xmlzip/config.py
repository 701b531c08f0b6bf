"""Shared configuration for xmlzip."""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from jsonschema import Draft7Validator

from xmlzip.errors import ConfigError

if TYPE_CHECKING:
    from xmlzip.models import SplitConfig

# Prolog written at the start of every fragment
XML_PROLOG = '<?xml version="1.0" encoding="UTF-8"?>\n'

DEFAULT_BATCH_SIZE = 10

# Fragment names are zero-padded to this many digits (Fragment-0001.xml)
DEFAULT_NAME_WIDTH = 4
MAX_NAME_WIDTH = 12

DEFAULT_STEM = "Fragment"

# Bytes handed to the XML parser per feed() call
CHUNK_SIZE = 64 * 1024

# HTTP timeout in seconds for remote sources
HTTP_TIMEOUT = 30

# XML local name: no prefix, no whitespace, no markup characters
ELEMENT_NAME_PATTERN = re.compile(r"^[A-Za-z_][\w.\-]*$")

# Entry stem: safe inside a zip entry name on every platform
STEM_PATTERN = re.compile(r"^[\w.\-]+$")

JOB_CONFIG_SCHEMA: dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "required": ["split_element"],
    "properties": {
        "split_element": {"type": "string", "minLength": 1},
        "batch_size": {"type": "integer", "minimum": 1},
        "stem": {"type": "string", "minLength": 1},
        "name_width": {"type": "integer", "minimum": 1},
        "on_mismatch": {"enum": ["strict", "skip"]},
        "on_unclosed": {"enum": ["warn", "error"]},
    },
}


def validate_element_name(name: str) -> None:
    """Validate the split element name.

    Args:
        name: Local name of the element to split on

    Raises:
        ConfigError: If the name is not a valid unprefixed XML name
    """
    if not ELEMENT_NAME_PATTERN.match(name or ""):
        raise ConfigError(
            f"Invalid element name: '{name}'. Expected an unprefixed XML name (e.g., record)"
        )


def validate_batch_size(batch_size: int) -> None:
    """Validate the number of split elements per fragment.

    Raises:
        ConfigError: If batch size is not a positive integer
    """
    if isinstance(batch_size, bool) or not isinstance(batch_size, int):
        raise ConfigError(f"Invalid batch size: {batch_size!r}. Expected an integer")
    if batch_size < 1:
        raise ConfigError(f"Invalid batch size: {batch_size}. Must be at least 1")


def validate_stem(stem: str) -> None:
    """Validate the entry name stem.

    Raises:
        ConfigError: If the stem contains path separators or other unsafe characters
    """
    if not STEM_PATTERN.match(stem or ""):
        raise ConfigError(
            f"Invalid entry stem: '{stem}'. Use letters, digits, '.', '-' or '_'"
        )


def validate_name_width(width: int) -> None:
    """Validate the zero-padding width of fragment indexes.

    Raises:
        ConfigError: If width is outside 1..MAX_NAME_WIDTH
    """
    if isinstance(width, bool) or not isinstance(width, int):
        raise ConfigError(f"Invalid name width: {width!r}. Expected an integer")
    if not 1 <= width <= MAX_NAME_WIDTH:
        raise ConfigError(
            f"Invalid name width: {width}. Expected 1 to {MAX_NAME_WIDTH} digits"
        )


def load_job_config(path: Path, **overrides: Any) -> SplitConfig:
    """Load a split job from a YAML file.

    Keyword overrides with a value other than None replace the
    corresponding file setting, so command-line options win.

    Args:
        path: YAML job file
        overrides: Field values taking precedence over the file

    Returns:
        Validated SplitConfig

    Raises:
        ConfigError: If the file is not valid YAML or violates the job schema
    """
    from xmlzip.models import MismatchPolicy, SplitConfig, UnclosedPolicy

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in job file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read job file {path}: {e}") from e

    if data is None:
        data = {}
    if isinstance(data, dict):
        data.update({key: value for key, value in overrides.items() if value is not None})

    validator = Draft7Validator(JOB_CONFIG_SCHEMA)
    errors = sorted(
        validator.iter_errors(data), key=lambda e: [str(p) for p in e.path]
    )
    if errors:
        messages = []
        for error in errors:
            location = "/".join(str(p) for p in error.path) or "(root)"
            messages.append(f"{location}: {error.message}")
        raise ConfigError(f"Invalid job file {path}: " + "; ".join(messages))

    return SplitConfig(
        split_element=data["split_element"],
        batch_size=data.get("batch_size", DEFAULT_BATCH_SIZE),
        stem=data.get("stem", DEFAULT_STEM),
        name_width=data.get("name_width", DEFAULT_NAME_WIDTH),
        on_mismatch=MismatchPolicy(data.get("on_mismatch", MismatchPolicy.STRICT)),
        on_unclosed=UnclosedPolicy(data.get("on_unclosed", UnclosedPolicy.WARN)),
    )
