"""Configuration loader for the JSON node editor."""

import os
import re
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from pydantic import ValidationError
from dotenv import load_dotenv

from .models import EditorConfig


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""
    pass


class ConfigLoader:
    """Loads and validates configuration from YAML, .env and the environment."""

    def __init__(self, config_file: Optional[str] = None, env_file: Optional[str] = None):
        """Initialize the configuration loader.

        Args:
            config_file: Optional path to YAML configuration file
            env_file: Optional path to .env file (defaults to .env in current directory)
        """
        self.config_file = config_file or "node_editor.yaml"
        self.env_file = env_file or ".env"

        self._load_env_file()

    def _load_env_file(self) -> None:
        """Load environment variables from .env file if it exists."""
        env_path = Path(self.env_file)
        if env_path.exists():
            load_dotenv(env_path)
        else:
            config_dir_env = Path(self.config_file).parent / ".env"
            if config_dir_env.exists():
                load_dotenv(config_dir_env)

    def load_config(self) -> EditorConfig:
        """Load configuration from YAML file and environment variables.

        Returns:
            EditorConfig: Validated editor configuration

        Raises:
            ConfigurationError: If configuration loading or validation fails
        """
        try:
            config_data: Dict[str, Any] = {}

            yaml_config = self._load_yaml_config()
            if yaml_config:
                config_data.update(yaml_config)

            # Environment variables take precedence
            env_config = self._load_env_config()
            config_data = self._merge_configs(config_data, env_config)

            return EditorConfig(**config_data)

        except ValidationError as e:
            error_details = self._format_validation_errors(e)
            raise ConfigurationError(f"Configuration validation failed:\n{error_details}")
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Failed to load configuration: {str(e)}")

    def _load_yaml_config(self) -> Optional[Dict[str, Any]]:
        """Load configuration from YAML file.

        Returns:
            Dict containing YAML configuration or None if file doesn't exist
        """
        config_path = Path(self.config_file)
        if not config_path.exists():
            return None

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = self._substitute_env_vars(f.read())
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self.config_file}: {str(e)}")
        except OSError as e:
            raise ConfigurationError(f"Failed to read {self.config_file}: {str(e)}")

        if not isinstance(data, dict):
            raise ConfigurationError(f"Top level of {self.config_file} must be a mapping")
        return data

    def _load_env_config(self) -> Dict[str, Any]:
        """Load configuration from environment variables.

        Returns:
            Dict containing environment-based configuration
        """
        config: Dict[str, Any] = {}

        formatting = {}
        if os.getenv('NODE_EDITOR_TAB_SIZE'):
            formatting['tab_size'] = int(os.getenv('NODE_EDITOR_TAB_SIZE'))
        if os.getenv('NODE_EDITOR_INSERT_SPACES'):
            formatting['insert_spaces'] = os.getenv('NODE_EDITOR_INSERT_SPACES').lower() == 'true'
        if os.getenv('NODE_EDITOR_EOL'):
            formatting['eol'] = self._convert_eol(os.getenv('NODE_EDITOR_EOL'))

        if formatting:
            config['formatting'] = formatting

        logging_config = {}
        if os.getenv('LOG_LEVEL'):
            logging_config['log_level'] = os.getenv('LOG_LEVEL')
        if os.getenv('LOG_FILE'):
            logging_config['log_file'] = os.getenv('LOG_FILE')
        if os.getenv('NODE_EDITOR_JSON_LOGGING'):
            logging_config['enable_json_logging'] = os.getenv('NODE_EDITOR_JSON_LOGGING').lower() == 'true'

        if logging_config:
            config['logging'] = logging_config

        if os.getenv('NODE_EDITOR_MAX_DOCUMENT_SIZE'):
            config['max_document_size'] = int(os.getenv('NODE_EDITOR_MAX_DOCUMENT_SIZE'))

        return config

    def _convert_eol(self, value: str) -> str:
        """Map the LF/CRLF names accepted in the environment to the characters."""
        names = {"lf": "\n", "crlf": "\r\n"}
        return names.get(value.strip().lower(), value)

    def _merge_configs(self, yaml_config: Dict[str, Any], env_config: Dict[str, Any]) -> Dict[str, Any]:
        """Merge YAML and environment configurations with env taking precedence.

        Args:
            yaml_config: Configuration from YAML file
            env_config: Configuration from environment variables

        Returns:
            Merged configuration dictionary
        """
        merged = yaml_config.copy()

        for key, value in env_config.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = {**merged[key], **value}
            else:
                merged[key] = value

        return merged

    def _format_validation_errors(self, error: ValidationError) -> str:
        """Format Pydantic validation errors into readable messages.

        Args:
            error: Pydantic ValidationError

        Returns:
            Formatted error message string
        """
        error_messages = []
        for err in error.errors():
            field_path = " -> ".join(str(loc) for loc in err['loc'])
            error_messages.append(f"  {field_path}: {err['msg']}")

        return "\n".join(error_messages)

    def _substitute_env_vars(self, content: str) -> str:
        """Substitute ${VAR_NAME} and ${VAR_NAME:-default} references in YAML content."""
        pattern = r'\$\{([^}]+)\}'

        def replace_var(match):
            var_expr = match.group(1)
            if ':-' in var_expr:
                var_name, default_value = var_expr.split(':-', 1)
                return os.getenv(var_name.strip(), default_value.strip())
            value = os.getenv(var_expr.strip())
            return value if value is not None else match.group(0)

        return re.sub(pattern, replace_var, content)


def load_config(config_file: Optional[str] = None, env_file: Optional[str] = None) -> EditorConfig:
    """Convenience function to load configuration.

    Args:
        config_file: Optional path to YAML configuration file
        env_file: Optional path to .env file

    Returns:
        EditorConfig: Validated editor configuration

    Raises:
        ConfigurationError: If configuration loading or validation fails
    """
    loader = ConfigLoader(config_file, env_file)
    return loader.load_config()
