"""Tests for configuration loading."""

from leadscope.core.config import (
    ConfigManager,
    LeadscopeConfig,
    get_default_config,
    load_config_from_env,
)
from leadscope.core.config.settings import DEFAULT_NCUA_ENDPOINTS


class TestDefaults:
    def test_default_config(self):
        config = get_default_config()

        assert config.sources.fdic_base_url == "https://banks.data.fdic.gov/api"
        assert config.sources.ncua_endpoints == DEFAULT_NCUA_ENDPOINTS
        assert config.sources.proxy_url is None
        assert config.overrides.remote_url is None
        assert config.overrides.namespace == "lead_overrides"
        assert config.cache.ttl == 3600
        assert config.web.port == 8000

    def test_endpoint_list_not_shared(self):
        first, second = LeadscopeConfig(), LeadscopeConfig()
        first.sources.ncua_endpoints.append("https://example.test")
        assert second.sources.ncua_endpoints == DEFAULT_NCUA_ENDPOINTS

    def test_dict_round_trip(self):
        config = LeadscopeConfig.from_dict({"cache": {"ttl": 60}, "web": {"port": 9000}})
        assert LeadscopeConfig.from_dict(config.to_dict()) == config


class TestConfigManager:
    def test_missing_file_gives_defaults(self, tmp_path):
        manager = ConfigManager(tmp_path / "absent.toml")
        assert manager.get_config() == LeadscopeConfig()

    def test_reads_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            '[sources]\nproxy_url = "https://proxy.example.test/api/ncua/credit-unions"\ntimeout = 5.0\n'
            '[overrides]\nlocal_path = "/tmp/o.duckdb"\n'
            '[logging]\nlevel = "DEBUG"\n'
        )
        config = ConfigManager(path, use_env=False).get_config()

        assert config.sources.proxy_url == "https://proxy.example.test/api/ncua/credit-unions"
        assert config.sources.timeout == 5.0
        assert config.overrides.local_path == "/tmp/o.duckdb"
        assert config.logging.level == "DEBUG"

    def test_invalid_toml_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[sources\n")
        assert ConfigManager(path).get_config() == LeadscopeConfig()

    def test_unknown_keys_fall_back_to_defaults(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[cache]\nflavour = 'vanilla'\n")
        assert ConfigManager(path).get_config() == LeadscopeConfig()

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.toml"
        path.write_text("[cache]\nttl = 10\n")
        monkeypatch.setenv("LEADSCOPE_CACHE_TTL", "99")

        assert ConfigManager(path).get_config().cache.ttl == 99

    def test_update_config(self, tmp_path):
        manager = ConfigManager(tmp_path / "absent.toml")
        manager.update_config(web={"host": "0.0.0.0"})

        assert manager.get_config().web.host == "0.0.0.0"
        assert manager.get_config().web.port == 8000


class TestEnvironment:
    def test_empty_environment(self):
        assert load_config_from_env() == {}

    def test_api_url_configures_proxy_and_remote_overrides(self, monkeypatch):
        monkeypatch.setenv("LEADSCOPE_API_URL", "https://leads.example.test/")
        config = load_config_from_env()

        assert config["sources"]["proxy_url"] == "https://leads.example.test/api/ncua/credit-unions"
        assert config["overrides"]["remote_url"] == "https://leads.example.test"

    def test_endpoint_list_and_numbers(self, monkeypatch):
        monkeypatch.setenv("LEADSCOPE_NCUA_ENDPOINTS", "https://a.test/x.json, ,https://b.test/y.json")
        monkeypatch.setenv("LEADSCOPE_PROVIDER_TIMEOUT", "2.5")
        monkeypatch.setenv("LEADSCOPE_RESULT_LIMIT", "50")
        sources = load_config_from_env()["sources"]

        assert sources["ncua_endpoints"] == ["https://a.test/x.json", "https://b.test/y.json"]
        assert sources["timeout"] == 2.5
        assert sources["result_limit"] == 50

    def test_web_settings(self, monkeypatch):
        monkeypatch.setenv("LEADSCOPE_HOST", "0.0.0.0")
        monkeypatch.setenv("LEADSCOPE_PORT", "8080")
        monkeypatch.setenv("LEADSCOPE_RELOAD", "Yes")

        assert load_config_from_env()["web"] == {"host": "0.0.0.0", "port": 8080, "reload": True}
