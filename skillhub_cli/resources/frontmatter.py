"""Frontmatter header parsing for resource manifests.

A manifest is a markdown file that may start with a YAML block delimited by
``---`` lines. Only the header is read; the markdown body is left unread.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any
from typing import TextIO

import yaml
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import ValidationError
from pydantic import field_validator

from .errors import FrontmatterError

DELIMITER = "---"

# YAML scalars that a text field accepts
SCALAR_TYPES = (str, int, float, bool, date)


def _scalar_to_str(value: Any) -> str:
    """Render a YAML scalar as a string field would read it (``yes`` -> ``"true"``)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


class ManifestMetadata(BaseModel):
    """Fields every manifest header may carry. Other keys are kept as extras."""

    model_config = ConfigDict(extra="allow")

    name: str = ""
    description: str = ""

    @field_validator("name", "description", mode="before")
    @classmethod
    def _coerce_scalar(cls, value: Any) -> Any:
        # Numbers, booleans and dates are valid text once stringified
        if value is None:
            return ""
        if isinstance(value, SCALAR_TYPES):
            return _scalar_to_str(value)
        return value

    @classmethod
    def from_header(cls, header: dict[str, Any]) -> ManifestMetadata:
        """Build metadata from a parsed header.

        Raises:
            FrontmatterError: If a known field is a list or mapping
        """
        try:
            return cls.model_validate(header)
        except ValidationError as e:
            problems = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors())
            raise FrontmatterError(problems) from e

    def extra_fields(self) -> dict[str, str]:
        """Scalar extra keys, stringified (lists and mappings are dropped)."""
        extras = self.model_extra or {}
        return {str(key): _scalar_to_str(value) for key, value in extras.items() if isinstance(value, SCALAR_TYPES)}


def parse_header(stream: TextIO) -> dict[str, Any]:
    """Parse the leading frontmatter block from a text stream.

    Reads line by line and stops at the closing delimiter, so the body is
    never consumed.

    Args:
        stream: Text stream positioned at the start of the file

    Returns:
        Parsed header mapping, or an empty dict when the file has no header

    Raises:
        FrontmatterError: Unterminated header, invalid YAML, or a header that
            is not a mapping
    """
    first = stream.readline()
    if first.strip() != DELIMITER:
        return {}

    lines: list[str] = []
    for line in iter(stream.readline, ""):
        if line.strip() == DELIMITER:
            break
        lines.append(line)
    else:
        raise FrontmatterError("missing closing frontmatter delimiter")

    try:
        data = yaml.safe_load("".join(lines))
    except yaml.YAMLError as e:
        raise FrontmatterError(_describe_yaml_error(e)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontmatterError(f"frontmatter must be a mapping, got {type(data).__name__}")
    return data


def read_manifest(path: Path) -> ManifestMetadata:
    """Open a markdown manifest and parse its header into metadata.

    Raises:
        OSError: File cannot be opened or read
        FrontmatterError: Header is malformed
    """
    try:
        with open(path, encoding="utf-8") as f:
            header = parse_header(f)
    except UnicodeDecodeError as e:
        raise FrontmatterError(f"not valid UTF-8: {e.reason}") from e
    return ManifestMetadata.from_header(header)


def _describe_yaml_error(e: yaml.YAMLError) -> str:
    """One-line YAML error message with the offending header line when known."""
    mark = getattr(e, "problem_mark", None)
    problem = getattr(e, "problem", None) or str(e).splitlines()[0]
    if mark is not None:
        # +2: mark lines are 0-based and the header starts after the opening delimiter
        return f"invalid YAML at line {mark.line + 2}: {problem}"
    return f"invalid YAML: {problem}"
