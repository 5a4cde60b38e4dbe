import pytest

from swagger_sync.config import SyncConfig, load_config
from swagger_sync.errors import SwaggerSyncError
from swagger_sync.parser.swagger import CollapsePolicy


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path):
        config = load_config(tmp_path)
        assert config == SyncConfig()
        assert config.out_dir == "service"
        assert config.lock_path == "swag.lock"
        assert config.collapse_policy == CollapsePolicy.FIRST_WINS

    def test_yaml_file(self, tmp_path):
        (tmp_path / "swag-config.yaml").write_text(
            "origin_url: http://api.example.com/v2/api-docs\nout_dir: src/api\ncollapse_policy: reject\n",
            encoding="utf-8",
        )
        config = load_config(tmp_path)
        assert config.origin_url == "http://api.example.com/v2/api-docs"
        assert config.out_dir == "src/api"
        assert config.collapse_policy == CollapsePolicy.REJECT

    def test_camel_case_json_file(self, tmp_path):
        (tmp_path / "swag-config.json").write_text(
            '{"originUrl": "http://x/api-docs", "outDir": "gen", "lockPath": "api.lock", "extra": 1}',
            encoding="utf-8",
        )
        config = load_config(tmp_path)
        assert config.origin_url == "http://x/api-docs"
        assert config.lock_file(tmp_path) == tmp_path / "gen" / "api.lock"

    def test_overrides_win_and_none_is_ignored(self, tmp_path):
        (tmp_path / "swag-config.yaml").write_text("outDir: gen\ntemplatePath: t.j2\n", encoding="utf-8")
        config = load_config(tmp_path, {"out_dir": "other", "template_path": None})
        assert config.out_dir == "other"
        assert config.template_path == "t.j2"

    def test_invalid_policy(self, tmp_path):
        (tmp_path / "swag-config.yaml").write_text("collapse_policy: random\n", encoding="utf-8")
        with pytest.raises(SwaggerSyncError):
            load_config(tmp_path)

    def test_invalid_yaml(self, tmp_path):
        (tmp_path / "swag-config.yaml").write_text("key: [invalid\n", encoding="utf-8")
        with pytest.raises(SwaggerSyncError):
            load_config(tmp_path)
