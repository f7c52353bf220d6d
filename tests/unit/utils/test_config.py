"""Unit tests for configuration utilities in config.py

Test coverage includes:

1. Environment variable resolution
   - Ensures app_env() correctly reads APP_ENV.

2. Project root resolution
   - Ensures project_root() correctly reads PROJECT_ROOT from environment variables.

3. Configuration loading behavior
   - Ensures load_config() falls back to the built-in defaults without a file.
   - Ensures YAML documents are merged over the defaults.
   - Ensures the config file is located via argument, env var or APP_ENV.
   - Ensures malformed documents and non-mapping sections raise BadConfigurationError.
"""

from pathlib import Path

import pytest

from linkshortener.utils import config
from linkshortener.exceptions import BadConfigurationError
from linkshortener.utils.constants import APP_ENV_ENV, PROJECT_ROOT_ENV, CONFIG_PATH_ENV


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture(autouse=True)
def _env(monkeypatch, tmp_path):
    """Isolate configuration lookup in a temporary project root."""
    monkeypatch.setenv(PROJECT_ROOT_ENV, str(tmp_path))
    monkeypatch.setenv(APP_ENV_ENV, 'test')
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)


@pytest.fixture
def config_dir(tmp_path) -> Path:
    path = tmp_path / 'config'
    path.mkdir()
    return path


# -------------------------------
# 1. Environment variable resolution
# -------------------------------


def test_app_env(monkeypatch):
    monkeypatch.setenv(APP_ENV_ENV, 'PROD')
    assert config.app_env() == 'prod'


def test_app_env_defaults_to_local(monkeypatch):
    monkeypatch.delenv(APP_ENV_ENV, raising=False)
    assert config.app_env() == 'local'


# -------------------------------
# 2. Project root resolution
# -------------------------------


def test_project_root(tmp_path):
    assert config.project_root() == tmp_path.resolve()


def test_project_root_defaults_to_cwd(monkeypatch, tmp_path):
    monkeypatch.delenv(PROJECT_ROOT_ENV)
    monkeypatch.chdir(tmp_path)
    assert config.project_root() == tmp_path.resolve()


# -------------------------------
# 3. Configuration loading behavior
# -------------------------------


def test_load_config_defaults_without_file():
    result = config.load_config()

    assert result == config.default_config()
    assert result['storage']['backend'] == 'file'
    assert result['registry']['max_batch_size'] == 5
    assert result['registry']['default_validity_minutes'] == 30
    assert result['geolocation']['enabled'] is True


def test_default_config_is_a_fresh_copy():
    first = config.default_config()
    first['storage']['path'] = 'mutated.json'
    assert config.default_config()['storage']['path'] == 'shortened_urls.json'


def test_load_config_merges_env_file(config_dir):
    (config_dir / 'test.yaml').write_text(
        'storage:\n'
        '  backend: memory\n'
        'registry:\n'
        '  max_batch_size: 10\n'
    )

    result = config.load_config()

    assert result['storage']['backend'] == 'memory'
    assert result['storage']['path'] == 'shortened_urls.json'
    assert result['registry']['max_batch_size'] == 10
    assert result['registry']['shortcode_length'] == 6


def test_load_config_env_var_path(monkeypatch, tmp_path):
    path = tmp_path / 'custom.yaml'
    path.write_text('storage:\n  backend: memory\n')
    monkeypatch.setenv(CONFIG_PATH_ENV, str(path))

    assert config.load_config()['storage']['backend'] == 'memory'


def test_load_config_explicit_path_wins(monkeypatch, tmp_path):
    explicit = tmp_path / 'explicit.yaml'
    explicit.write_text('storage:\n  backend: file\n  path: explicit.json\n')
    from_env = tmp_path / 'env.yaml'
    from_env.write_text('storage:\n  backend: memory\n')
    monkeypatch.setenv(CONFIG_PATH_ENV, str(from_env))

    result = config.load_config(explicit)

    assert result['storage']['backend'] == 'file'
    assert result['storage']['path'] == 'explicit.json'


def test_load_config_empty_file(config_dir):
    (config_dir / 'test.yaml').write_text('')
    assert config.load_config() == config.default_config()


@pytest.mark.parametrize(
    'document',
    [
        'storage: [unclosed\n',
        '- just\n- a list\n',
        'storage:\n  backend: postgres\n',
        'storage:\n  backend: redis\n',
    ],
)
def test_load_config_bad_documents(config_dir, document):
    (config_dir / 'test.yaml').write_text(document)

    with pytest.raises(BadConfigurationError):
        config.load_config()


@pytest.mark.parametrize(
    'document, section',
    [
        ('storage:\n', 'storage'),
        ('storage:\n  backend: memory\nregistry:\n', 'registry'),
        ('geolocation:\n', 'geolocation'),
        ('registry: 5\n', 'registry'),
        ('geolocation:\n  - enabled\n', 'geolocation'),
    ],
)
def test_load_config_section_not_a_mapping(config_dir, document, section):
    (config_dir / 'test.yaml').write_text(document)

    with pytest.raises(BadConfigurationError, match=f"Section '{section}'"):
        config.load_config()
