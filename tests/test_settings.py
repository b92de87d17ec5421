"""
Tests for settings loading
"""
import os
from unittest.mock import patch

import pytest
import yaml


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    import settings

    for var in settings.ENV_OVERRIDES:
        monkeypatch.delenv(var, raising=False)
    settings._cached_settings = None
    yield
    settings._cached_settings = None


class TestLoadSettings:
    """Tests for YAML + defaults + environment merging"""

    def test_file_values_merge_over_defaults(self, tmp_path):
        from settings import load_settings

        config_file = tmp_path / 'settings.yaml'
        config_file.write_text(yaml.dump({'database': {'url': 'postgresql://u:p@db/umami'}}))

        settings = load_settings(force=True, config_file=str(config_file))

        assert settings['database']['url'] == 'postgresql://u:p@db/umami'
        assert settings['logging']['log_query'] is False
        assert settings['app']['env'] == 'development'

    def test_missing_file_writes_defaults(self, tmp_path):
        from constants import DEFAULT_SETTINGS
        from settings import load_settings

        config_file = tmp_path / 'settings.yaml'
        settings = load_settings(force=True, config_file=str(config_file))

        assert settings == DEFAULT_SETTINGS
        assert yaml.safe_load(config_file.read_text()) == DEFAULT_SETTINGS

    def test_missing_directory_is_not_created(self, tmp_path):
        from settings import load_settings

        config_file = tmp_path / 'absent' / 'settings.yaml'
        load_settings(force=True, config_file=str(config_file))

        assert not os.path.exists(config_file.parent)

    def test_defaults_are_not_mutated(self, tmp_path):
        from constants import DEFAULT_SETTINGS
        from settings import load_settings

        config_file = tmp_path / 'settings.yaml'
        config_file.write_text(yaml.dump({'logging': {'level': 'DEBUG'}}))

        load_settings(force=True, config_file=str(config_file))

        assert DEFAULT_SETTINGS['logging']['level'] == 'INFO'

    def test_environment_overrides(self, tmp_path, monkeypatch):
        from settings import load_settings, is_production

        monkeypatch.setenv('DATABASE_URL', 'sqlite:///override.db')
        monkeypatch.setenv('LOG_QUERY', 'true')
        monkeypatch.setenv('APP_ENV', 'production')

        settings = load_settings(force=True, config_file=str(tmp_path / 'settings.yaml'))

        assert settings['database']['url'] == 'sqlite:///override.db'
        assert settings['logging']['log_query'] is True
        assert is_production(settings)

    @pytest.mark.parametrize('value,expected', [('1', True), ('yes', True), ('0', False), ('off', False)])
    def test_log_query_flag_parsing(self, tmp_path, monkeypatch, value, expected):
        from settings import load_settings

        monkeypatch.setenv('LOG_QUERY', value)
        settings = load_settings(force=True, config_file=str(tmp_path / 'settings.yaml'))

        assert settings['logging']['log_query'] is expected

    def test_settings_are_cached(self, tmp_path):
        from settings import load_settings

        first = load_settings(force=True, config_file=str(tmp_path / 'settings.yaml'))
        assert load_settings() is first

    def test_reload_conf_rereads_file_and_environment(self, tmp_path, monkeypatch):
        import settings as settings_module

        config_file = tmp_path / 'settings.yaml'
        config_file.write_text(yaml.dump({'logging': {'level': 'DEBUG'}}))
        monkeypatch.setattr(settings_module, 'CONFIG_FILE', str(config_file))

        first = settings_module.load_settings(force=True)
        config_file.write_text(yaml.dump({'logging': {'level': 'WARNING'}}))
        monkeypatch.setenv('DATABASE_URL', 'sqlite:///reloaded.db')

        assert settings_module.load_settings() is first
        reloaded = settings_module.reload_conf()

        assert reloaded is not first
        assert reloaded['logging']['level'] == 'WARNING'
        assert reloaded['database']['url'] == 'sqlite:///reloaded.db'
        assert settings_module.load_settings() is reloaded


class TestLogRenderer:
    """JSON vs console structlog renderer selection"""

    def _settings(self, tmp_path):
        from settings import load_settings
        return load_settings(force=True, config_file=str(tmp_path / 'settings.yaml'))

    def test_console_by_default(self, tmp_path):
        from app import use_json_logs

        assert use_json_logs(self._settings(tmp_path)) is False

    def test_log_format_json(self, tmp_path, monkeypatch):
        from app import use_json_logs

        monkeypatch.setenv('LOG_FORMAT', 'json')

        assert use_json_logs(self._settings(tmp_path)) is True

    def test_production_defaults_to_json(self, tmp_path, monkeypatch):
        from app import use_json_logs

        monkeypatch.setenv('APP_ENV', 'production')

        assert use_json_logs(self._settings(tmp_path)) is True

    def test_production_respects_explicit_console(self, tmp_path, monkeypatch):
        from app import use_json_logs

        monkeypatch.setenv('APP_ENV', 'production')
        monkeypatch.setenv('LOG_FORMAT', 'console')

        assert use_json_logs(self._settings(tmp_path)) is False

    def test_configure_logging_installs_json_renderer(self, tmp_path, monkeypatch):
        import structlog
        from app import configure_logging

        monkeypatch.setenv('LOG_FORMAT', 'json')
        settings = self._settings(tmp_path)

        with patch('app.structlog.configure') as configure:
            configure_logging(settings)

        processors = configure.call_args.kwargs['processors']
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
