"""
Configuration loader with validation and environment variable substitution
"""
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


class ConfigLoader:
    """Load and validate configuration from YAML with env var substitution"""

    ENV_VAR_PATTERN = re.compile(r'\$\{([^}:]+)(?::([^}]*))?\}')

    # Credentials and URLs are used verbatim, never coerced to numbers or bools
    RAW_STRING_FIELDS = frozenset({
        'service.app_id',
        'service.app_secret',
        'service.endpoint',
    })

    def __init__(self, config_path: Optional[str] = None):
        self.explicit = config_path is not None
        self.config_path = Path(config_path) if self.explicit else DEFAULT_CONFIG_PATH
        self._config = None

    def load(self) -> Dict[str, Any]:
        """Load configuration from file"""
        if not self.config_path.exists():
            if self.explicit:
                raise FileNotFoundError(f"Config file not found: {self.config_path}")
            self._config = {}
            return self._config

        with open(self.config_path, 'r') as f:
            raw_config = yaml.safe_load(f) or {}

        if not isinstance(raw_config, dict):
            raise ValueError(f"Config file must contain a mapping: {self.config_path}")

        # Substitute environment variables
        self._config = self._substitute_env_vars(raw_config)

        self._validate_config()

        return self._config

    def _substitute_env_vars(self, obj: Any, path: str = "") -> Any:
        """Recursively substitute environment variables"""
        if isinstance(obj, dict):
            return {
                k: self._substitute_env_vars(v, f"{path}.{k}" if path else str(k))
                for k, v in obj.items()
            }
        elif isinstance(obj, list):
            return [self._substitute_env_vars(item, path) for item in obj]
        elif isinstance(obj, str):
            return self._substitute_string(obj, coerce=path not in self.RAW_STRING_FIELDS)
        else:
            return obj

    def _substitute_string(self, value: str, coerce: bool = True) -> Any:
        """Substitute ${VAR:default} patterns with environment variables"""
        def replacer(match):
            var_name = match.group(1)
            default_value = match.group(2)

            env_value = os.getenv(var_name)
            if env_value is None:
                if default_value is None:
                    raise ValueError(f"Required environment variable not set: {var_name}")
                return default_value
            return env_value

        result = self.ENV_VAR_PATTERN.sub(replacer, value)

        if not coerce:
            return result

        # Convert to appropriate type
        if result.lower() == 'true':
            return True
        elif result.lower() == 'false':
            return False
        elif result.isdigit():
            return int(result)
        elif self._is_float(result):
            return float(result)
        else:
            return result

    @staticmethod
    def _is_float(value: str) -> bool:
        """Check if string can be converted to float"""
        try:
            float(value)
            return True
        except ValueError:
            return False

    def _validate_config(self):
        """Validate the shape of the service section"""
        service = self._config.get('service')
        if service is None:
            return
        if not isinstance(service, dict):
            raise ValueError("Configuration field 'service' must be a mapping")

        timeout = service.get('timeout')
        if timeout is not None and (
                isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0):
            raise ValueError(f"Configuration field service.timeout must be a positive number: {timeout!r}")

        endpoint = service.get('endpoint')
        if endpoint is not None and not str(endpoint).startswith(('http://', 'https://')):
            raise ValueError(f"Configuration field service.endpoint must be an http(s) URL: {endpoint!r}")

    def _get_nested(self, config: Dict, path: str) -> Any:
        """Get nested config value using dot notation"""
        keys = path.split('.')
        value = config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return None
        return value

    def get(self, path: str, default: Any = None) -> Any:
        """Get config value using dot notation"""
        if self._config is None:
            self.load()
        value = self._get_nested(self._config, path)
        if value is None or value == '':
            return default
        return value
