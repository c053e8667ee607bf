"""Unit tests for the configuration loader."""

import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from authconf.loader import (
    MASK,
    ConfigLoader,
    ConfigurationLoadError,
    dump_configuration,
    get_config_loader,
    parse_authentication_backend,
)
from authconf.schema import (
    AuthenticationBackendConfiguration,
    LDAPAuthenticationBackendConfiguration,
    PasswordConfiguration,
)


class TestParseAuthenticationBackend:
    """Test building dataclasses from parsed YAML."""

    def test_file_backend(self) -> None:
        """Test a file backend with a password section."""
        config = parse_authentication_backend(
            {
                "file": {
                    "path": "/config/users.yml",
                    "password": {"algorithm": "sha512", "iterations": 100000},
                },
                "refresh_interval": "10m",
            }
        )

        assert config.ldap is None
        assert config.file.path == "/config/users.yml"
        assert config.file.password == PasswordConfiguration(
            algorithm="sha512", iterations=100000
        )
        assert config.refresh_interval == "10m"

    def test_file_backend_without_password(self) -> None:
        """Test a file backend without password section gets a blank one."""
        config = parse_authentication_backend({"file": {"path": "/users.yml"}})
        assert config.file.password == PasswordConfiguration()

    def test_ldap_backend(self) -> None:
        """Test an LDAP backend."""
        config = parse_authentication_backend(
            {
                "ldap": {
                    "implementation": "activedirectory",
                    "url": "ldaps://ad.example.com",
                    "start_tls": True,
                    "base_dn": "dc=example,dc=com",
                    "user": "admin",
                    "password": "secret",
                }
            }
        )

        assert config.file is None
        assert config.ldap == LDAPAuthenticationBackendConfiguration(
            implementation="activedirectory",
            url="ldaps://ad.example.com",
            start_tls=True,
            base_dn="dc=example,dc=com",
            user="admin",
            password="secret",
        )

    def test_missing_section(self) -> None:
        """Test a missing section yields an empty configuration."""
        assert parse_authentication_backend(None) == AuthenticationBackendConfiguration()

    def test_null_backend_is_unset(self) -> None:
        """Test a backend key without a value is treated as absent."""
        config = parse_authentication_backend({"ldap": None})
        assert config.ldap is None

    def test_numeric_refresh_interval(self) -> None:
        """Test a numeric refresh interval is read as a string."""
        config = parse_authentication_backend({"refresh_interval": 300})
        assert config.refresh_interval == "300"

    def test_unknown_keys_ignored(self) -> None:
        """Test unknown keys are ignored."""
        config = parse_authentication_backend(
            {"file": {"path": "/users.yml", "unknown": 1}, "other": True}
        )
        assert config.file.path == "/users.yml"

    def test_wrong_shape(self) -> None:
        """Test a backend that is not a mapping is rejected."""
        with pytest.raises(ConfigurationLoadError, match="authentication_backend.ldap"):
            parse_authentication_backend({"ldap": "ldap://127.0.0.1"})

    def test_wrong_type(self) -> None:
        """Test a scalar of the wrong type is rejected."""
        with pytest.raises(ConfigurationLoadError, match="iterations` must be of type int"):
            parse_authentication_backend(
                {"file": {"path": "/users.yml", "password": {"iterations": "many"}}}
            )

        with pytest.raises(ConfigurationLoadError, match="start_tls` must be of type bool"):
            parse_authentication_backend({"ldap": {"start_tls": "yes please"}})


class TestConfigLoader:
    """Test ConfigLoader class."""

    def setup_method(self) -> None:
        """Setup test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_file = Path(self.temp_dir) / "configuration.yml"
        self.loader = ConfigLoader(str(self.config_file))

    def create_test_yaml(self, content: dict) -> Path:
        """Helper to create test YAML file."""
        with open(self.config_file, "w") as f:
            yaml.dump(content, f)
        return self.config_file

    def test_load(self) -> None:
        """Test loading a configuration file."""
        self.create_test_yaml(
            {
                "server": {"port": 9091},
                "authentication_backend": {"file": {"path": "/users.yml"}},
            }
        )

        config = self.loader.load()

        assert config.file.path == "/users.yml"

    def test_nonexistent_file(self) -> None:
        """Test loading from a nonexistent file."""
        loader = ConfigLoader("/nonexistent/configuration.yml")
        with pytest.raises(ConfigurationLoadError, match="not found"):
            loader.load()

    def test_invalid_yaml_file(self) -> None:
        """Test handling of invalid YAML file."""
        with open(self.config_file, "w") as f:
            f.write("invalid: yaml: content: [")

        with pytest.raises(ConfigurationLoadError, match="Invalid YAML"):
            self.loader.load()

    def test_empty_file(self) -> None:
        """Test an empty file yields an empty configuration."""
        self.config_file.write_text("")
        assert self.loader.load() == AuthenticationBackendConfiguration()

    def test_non_mapping_document(self) -> None:
        """Test a document that is not a mapping is rejected."""
        self.config_file.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationLoadError, match="must contain a mapping"):
            self.loader.load()

    def test_get_config_loader_default(self) -> None:
        """Test the default configuration path."""
        with patch.dict(os.environ, {}, clear=True):
            loader = get_config_loader()
        assert loader.config_file == Path("/etc/authconf/configuration.yml")

    def test_get_config_loader_env(self) -> None:
        """Test the configuration path from the environment."""
        with patch.dict(os.environ, {"AUTHCONF_CONFIG_PATH": str(self.config_file)}):
            loader = get_config_loader()
        assert loader.config_file == self.config_file


class TestDumpConfiguration:
    """Test dump_configuration."""

    def test_ldap_password_masked(self) -> None:
        """Test the LDAP bind password is masked and unset backends are omitted."""
        config = AuthenticationBackendConfiguration(
            ldap=LDAPAuthenticationBackendConfiguration(password="secret")
        )

        data = dump_configuration(config)

        assert "file" not in data
        assert data["ldap"]["password"] == MASK
        assert config.ldap.password == "secret"

    def test_file_backend(self) -> None:
        """Test a file backend is rendered with its password policy."""
        config = parse_authentication_backend({"file": {"path": "/users.yml"}})

        data = dump_configuration(config)

        assert "ldap" not in data
        assert data["file"]["password"]["algorithm"] == ""
