import json
from pathlib import Path

from click.testing import CliRunner

from core_types_ts.core_types_ts import core_types_ts

TEST_DATA = Path(__file__).parent / "test_data"


class TestCli:
    """Test cases for the core-types-ts command line"""

    def test_to_ts(self, tmp_path):
        output = tmp_path / "readme.ts"
        result = CliRunner().invoke(core_types_ts, ["to-ts", str(TEST_DATA / "readme.json"), str(output)])
        assert result.exit_code == 0, result.output
        assert output.read_text() == (TEST_DATA / "readme.ts").read_text()

    def test_to_ts_flags(self, tmp_path):
        output = tmp_path / "complex.ts"
        result = CliRunner().invoke(
            core_types_ts,
            ["to-ts", "--use-unknown", "--no-descriptive-header", str(TEST_DATA / "complex.json"), str(output)],
        )
        assert result.exit_code == 0, result.output
        assert output.read_text() == (TEST_DATA / "complex.ts").read_text()

    def test_to_ts_config_file(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"noDescriptiveHeader": True}))
        output = tmp_path / "annotations.ts"
        result = CliRunner().invoke(
            core_types_ts,
            ["to-ts", "--config", str(config), str(TEST_DATA / "annotations.json"), str(output)],
        )
        assert result.exit_code == 0, result.output
        assert output.read_text() == (TEST_DATA / "annotations.ts").read_text()

    def test_to_ts_user_package(self, tmp_path):
        output = tmp_path / "readme.ts"
        result = CliRunner().invoke(
            core_types_ts,
            ["to-ts", "--user-package", "my-package", str(TEST_DATA / "readme.json"), str(output)],
        )
        assert result.exit_code == 0, result.output
        assert "on behalf of my-package" in output.read_text()

    def test_to_ts_error(self, tmp_path):
        source = tmp_path / "broken.json"
        source.write_text(json.dumps({"version": 1, "types": [{"name": "A", "type": "ref", "ref": "B"}]}))
        result = CliRunner().invoke(core_types_ts, ["to-ts", str(source), str(tmp_path / "out.ts")])
        assert result.exit_code == 1
        assert "Reference to unknown type 'B'" in result.output
        assert not (tmp_path / "out.ts").exists()

    def test_from_ts(self, tmp_path):
        output = tmp_path / "annotations.json"
        result = CliRunner().invoke(core_types_ts, ["from-ts", str(TEST_DATA / "annotations.ts"), str(output)])
        assert result.exit_code == 0, result.output

        data = json.loads(output.read_text())
        assert [named["name"] for named in data["types"]] == ["User", "ChatLine", "Thingy", "Thing"]
        assert data["types"][0]["properties"]["name"]["node"]["description"] == "Must be a valid name, not */"

    def test_from_ts_non_exported_fail(self, tmp_path):
        source = tmp_path / "types.ts"
        source.write_text("type A = string;\n")
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"nonExported": "fail"}))
        result = CliRunner().invoke(
            core_types_ts,
            ["from-ts", "--config", str(config), str(source), str(tmp_path / "out.json")],
        )
        assert result.exit_code == 1
        assert "not exported" in result.output

    def test_from_ts_invalid_config_value(self, tmp_path):
        source = tmp_path / "types.ts"
        source.write_text("type A = string;\n")
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"nonExported": "sometimes"}))
        result = CliRunner().invoke(
            core_types_ts,
            ["from-ts", "--config", str(config), str(source), str(tmp_path / "out.json")],
        )
        assert result.exit_code == 2
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "Invalid value for --config" in result.output
        assert "sometimes" in result.output

    def test_to_ts_malformed_config_file(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text("{not json")
        result = CliRunner().invoke(
            core_types_ts,
            ["to-ts", "--config", str(config), str(TEST_DATA / "readme.json"), str(tmp_path / "out.ts")],
        )
        assert result.exit_code == 2
        assert "Invalid value for --config" in result.output
