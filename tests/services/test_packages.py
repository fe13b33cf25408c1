from __future__ import annotations

from pathlib import Path

from result import Err, Ok

from bedrock_workspace.models.enums import ReadErrorCode
from bedrock_workspace.services.packages import (
    manifest_version_or_none,
    read_json,
    read_manifest_version,
    read_package_info,
)
from tests.factories import PACKAGE, write_json


class TestReadJson:
    def test_missing_file(self, tmp_path: Path) -> None:
        result = read_json(tmp_path / "package.json")
        assert isinstance(result, Err)
        assert result.unwrap_err().code is ReadErrorCode.NOT_FOUND

    def test_invalid_json(self, tmp_path: Path) -> None:
        p = tmp_path / "package.json"
        p.write_text("{ not json", encoding="utf-8")
        result = read_json(p)
        assert isinstance(result, Err)
        error = result.unwrap_err()
        assert error.code is ReadErrorCode.PARSE_ERROR
        assert error.path == str(p)

    def test_valid(self, tmp_path: Path) -> None:
        p = write_json(tmp_path / "data.json", {"a": 1})
        assert read_json(p) == Ok({"a": 1})

    def test_oversized_integer_is_parse_error(self, tmp_path: Path) -> None:
        p = tmp_path / "manifest.json"
        p.write_text('{"header": {"version": ' + "9" * 5000 + "}}", encoding="utf-8")
        result = read_json(p)
        assert isinstance(result, Err)
        assert result.unwrap_err().code is ReadErrorCode.PARSE_ERROR
        assert manifest_version_or_none(p) is None

    def test_deep_nesting_is_parse_error(self, tmp_path: Path) -> None:
        p = tmp_path / "package.json"
        p.write_text("[" * 100_000 + "]" * 100_000, encoding="utf-8")
        result = read_json(p)
        assert isinstance(result, Err)
        assert result.unwrap_err().code is ReadErrorCode.PARSE_ERROR

    def test_unreadable_path_is_not_found(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").mkdir()
        result = read_json(tmp_path / "package.json")
        assert isinstance(result, Err)
        assert result.unwrap_err().code is ReadErrorCode.NOT_FOUND


class TestReadPackageInfo:
    def test_fields(self, tmp_path: Path) -> None:
        info = read_package_info(write_json(tmp_path / "package.json", PACKAGE)).unwrap()
        assert info.name == "bedrock-workspace-template"
        assert info.author == "Ackinari"
        assert len(info.dependencies) == 3
        assert len(info.dev_dependencies) == 1
        assert set(info.minecraft_dependencies) == {"@minecraft/server", "@minecraft/server-ui"}

    def test_non_object_is_parse_error(self, tmp_path: Path) -> None:
        result = read_package_info(write_json(tmp_path / "package.json", ["not", "an", "object"]))
        assert isinstance(result, Err)
        assert result.unwrap_err().code is ReadErrorCode.PARSE_ERROR


class TestManifestVersion:
    def test_three_integers(self, tmp_path: Path) -> None:
        p = write_json(tmp_path / "manifest.json", {"header": {"version": [1, 2, 3]}})
        assert read_manifest_version(p) == Ok((1, 2, 3))

    def test_wrong_length(self, tmp_path: Path) -> None:
        p = write_json(tmp_path / "manifest.json", {"header": {"version": [1, 2]}})
        result = read_manifest_version(p)
        assert isinstance(result, Err)
        assert result.unwrap_err().code is ReadErrorCode.PARSE_ERROR

    def test_non_integer_parts(self, tmp_path: Path) -> None:
        p = write_json(tmp_path / "manifest.json", {"header": {"version": ["1", 2, 3]}})
        assert isinstance(read_manifest_version(p), Err)
        p = write_json(tmp_path / "manifest.json", {"header": {"version": [True, 0, 0]}})
        assert isinstance(read_manifest_version(p), Err)

    def test_missing_header(self, tmp_path: Path) -> None:
        p = write_json(tmp_path / "manifest.json", {"format_version": 2})
        assert isinstance(read_manifest_version(p), Err)

    def test_or_none_swallows_every_failure(self, tmp_path: Path) -> None:
        broken = tmp_path / "broken.json"
        broken.write_text("{", encoding="utf-8")
        assert manifest_version_or_none(broken) is None
        assert manifest_version_or_none(tmp_path / "missing.json") is None
        ok = write_json(tmp_path / "ok.json", {"header": {"version": [0, 1, 0]}})
        assert manifest_version_or_none(ok) == (0, 1, 0)
