"""Tests for frontmatter header parsing."""

import io

import pytest

from skillhub_cli.resources.errors import FrontmatterError
from skillhub_cli.resources.frontmatter import ManifestMetadata
from skillhub_cli.resources.frontmatter import parse_header
from skillhub_cli.resources.frontmatter import read_manifest


class TestParseHeader:
    def test_parses_mapping(self):
        stream = io.StringIO("---\nname: code-review\ndescription: Reviews code\n---\n# Body\n")
        assert parse_header(stream) == {"name": "code-review", "description": "Reviews code"}

    def test_no_header_returns_empty(self):
        assert parse_header(io.StringIO("# Just markdown\n")) == {}

    def test_empty_header_returns_empty(self):
        assert parse_header(io.StringIO("---\n---\nbody\n")) == {}

    def test_stops_at_closing_delimiter(self):
        """The body is left unread for any later consumer."""
        stream = io.StringIO("---\nname: x\n---\nfirst body line\n")
        parse_header(stream)
        assert stream.readline() == "first body line\n"

    def test_missing_closing_delimiter(self):
        with pytest.raises(FrontmatterError, match="missing closing"):
            parse_header(io.StringIO("---\nname: x\n"))

    def test_invalid_yaml(self):
        with pytest.raises(FrontmatterError, match="invalid YAML"):
            parse_header(io.StringIO("---\nname: [unclosed\n---\n"))

    def test_non_mapping_header(self):
        with pytest.raises(FrontmatterError, match="must be a mapping"):
            parse_header(io.StringIO("---\n- a\n- b\n---\n"))


class TestManifestMetadata:
    def test_missing_fields_default_to_empty(self):
        meta = ManifestMetadata.from_header({})
        assert meta.name == ""
        assert meta.description == ""

    def test_null_description_becomes_empty(self):
        assert ManifestMetadata.from_header({"name": "x", "description": None}).description == ""

    def test_wrong_type_raises(self):
        with pytest.raises(FrontmatterError, match="name"):
            ManifestMetadata.from_header({"name": ["not", "a", "string"]})

    def test_extra_fields_keep_scalars_only(self):
        meta = ManifestMetadata.from_header(
            {"name": "x", "license": "MIT", "version": 2, "tags": ["a", "b"], "config": {"k": "v"}}
        )
        assert meta.extra_fields() == {"license": "MIT", "version": "2"}

    def test_extra_booleans_use_lowercase(self):
        assert ManifestMetadata.from_header({"beta": True}).extra_fields() == {"beta": "true"}


def test_read_manifest_from_file(tmp_path):
    path = tmp_path / "SKILL.md"
    path.write_text("---\nname: pdf\ndescription: Work with PDFs\n---\n", encoding="utf-8")
    meta = read_manifest(path)
    assert meta.name == "pdf"
    assert meta.description == "Work with PDFs"


def test_read_manifest_rejects_non_utf8(tmp_path):
    path = tmp_path / "SKILL.md"
    path.write_bytes(b"---\nname: \xff\xfe\n---\n")
    with pytest.raises(FrontmatterError, match="UTF-8"):
        read_manifest(path)


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("description: 2024", "2024"),
        ("description: 1.5", "1.5"),
        ("description: yes", "true"),
        ("description: false", "false"),
        ("description: 2024-01-15", "2024-01-15"),
    ],
)
def test_scalar_descriptions_are_stringified(header, expected):
    meta = ManifestMetadata.from_header(parse_header(io.StringIO(f"---\n{header}\n---\n")))
    assert meta.description == expected
