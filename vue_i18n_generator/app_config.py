"""Configuration module for the locale generator."""
import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Dict, Optional, Any, Tuple

import yaml
from dotenv import load_dotenv

from vue_i18n_generator.exceptions import ConfigurationError
from vue_i18n_generator.logging_config import setup_logger

VUE_I18N = 'vue-i18n'
VUEX_I18N = 'vuex-i18n'
SUPPORTED_I18N_LIBS = (VUE_I18N, VUEX_I18N)

DEFAULT_ESCAPE_CHAR = '!'
DEFAULT_FALLBACK_LOCALE = 'en'
DEFAULT_CONFIG_FILE_NAME = 'vue-i18n-generator.yaml'


@dataclass(frozen=True)
class GeneratorConfig:
    """Resolved generator options. Built once before aggregation starts."""
    # Transform options
    i18n_lib: str = VUE_I18N
    excludes: Tuple[str, ...] = ()
    escape_char: str = DEFAULT_ESCAPE_CHAR
    fallback_locale: Optional[str] = DEFAULT_FALLBACK_LOCALE
    lang_files: Tuple[str, ...] = ()

    # I/O paths, relative ones are resolved against project_root
    project_root: str = field(default_factory=os.getcwd)
    lang_path: str = 'resources/lang'
    js_path: str = 'resources/js/vue-i18n-locales/'
    js_file: str = 'resources/js/vue-i18n-locales.generated.js'
    show_output_messages: bool = False

    def __post_init__(self):
        if self.i18n_lib not in SUPPORTED_I18N_LIBS:
            raise ConfigurationError(
                f"Unsupported i18n_lib '{self.i18n_lib}'. Expected one of: {', '.join(SUPPORTED_I18N_LIBS)}."
            )
        if not self.escape_char:
            raise ConfigurationError("escape_char must be a non-empty string.")

    @classmethod
    def from_dict(cls, config: Dict[str, Any], project_root: Optional[str] = None) -> 'GeneratorConfig':
        """
        Build a configuration from a loaded YAML mapping.

        Missing keys fall back to the dataclass defaults.
        """
        defaults = cls(project_root=project_root or os.getcwd())
        return cls(
            i18n_lib=config.get('i18n_lib', defaults.i18n_lib),
            excludes=_as_tuple(config.get('excludes')),
            escape_char=config.get('escape_char', defaults.escape_char),
            fallback_locale=config.get('fallback_locale', defaults.fallback_locale),
            lang_files=_as_tuple(config.get('lang_files')),
            project_root=defaults.project_root,
            lang_path=config.get('lang_path', defaults.lang_path),
            js_path=config.get('js_path', defaults.js_path),
            js_file=config.get('js_file', defaults.js_file),
            show_output_messages=bool(config.get('show_output_messages', defaults.show_output_messages)),
        )

    def resolve_path(self, path: str) -> str:
        """Resolve a configured path against the project root."""
        return os.path.join(self.project_root, path.lstrip('/\\'))

    @property
    def lang_root(self) -> str:
        return self.resolve_path(self.lang_path)


def _as_tuple(value: Any) -> Tuple[str, ...]:
    """Accept a list, a comma separated string or nothing."""
    if not value:
        return ()
    if isinstance(value, str):
        return tuple(name.strip() for name in value.split(',') if name.strip())
    return tuple(str(name) for name in value)


def _compute_project_root() -> str:
    """The project root is taken from VUE_I18N_PROJECT_ROOT, else the working directory."""
    return os.path.abspath(os.environ.get('VUE_I18N_PROJECT_ROOT', os.getcwd()))


def _load_dotenv_files(project_root: str) -> Optional[str]:
    """Load the project's .env file, returning its path when one was found."""
    dotenv_path = os.path.join(project_root, '.env')
    if os.path.exists(dotenv_path):
        load_dotenv(dotenv_path)
        return dotenv_path
    return None


def _config_file_path(project_root: str) -> str:
    """VUE_I18N_CONFIG_FILE when set, else vue-i18n-generator.yaml in the project root."""
    config_file = os.environ.get('VUE_I18N_CONFIG_FILE', os.path.join(project_root, DEFAULT_CONFIG_FILE_NAME))
    return os.path.abspath(config_file)


def _warn(message: str) -> None:
    # The logger is configured from this file, so problems with it go to stderr
    print(f"vue-i18n-generator: {message} Using default configuration.", file=sys.stderr)


def _load_yaml_config(project_root: str) -> Dict[str, Any]:
    """
    Read the YAML configuration mapping.

    A missing, unreadable, empty or malformed file is reported on stderr
    and yields an empty mapping, so every option takes its default.
    """
    config_file = _config_file_path(project_root)

    if not os.path.exists(config_file):
        _warn(f"configuration file '{config_file}' not found.")
        return {}
    if not os.access(config_file, os.R_OK):
        _warn(f"configuration file '{config_file}' is not readable.")
        return {}

    try:
        with open(config_file, 'r', encoding='utf-8') as config_stream:
            loaded_config = yaml.safe_load(config_stream)
    except yaml.YAMLError as yaml_exc:
        _warn(f"invalid YAML in '{config_file}': {yaml_exc}.")
        return {}
    except OSError as os_exc:
        _warn(f"could not read '{config_file}': {os_exc}.")
        return {}

    if loaded_config is None:
        return {}
    if not isinstance(loaded_config, dict):
        _warn(f"'{config_file}' must hold a mapping of options, got {type(loaded_config).__name__}.")
        return {}
    return loaded_config


def _setup_logger_from_config(config: Dict[str, Any]) -> logging.Logger:
    """Set up logger based on configuration."""
    log_config = config.get('logging') or {}
    log_level_str = log_config.get('log_level', 'INFO').upper()
    log_file_path = log_config.get('log_file_path', '')
    log_to_console = log_config.get('log_to_console', True)
    return setup_logger(log_level_str, log_file_path, log_to_console)


def load_app_config() -> GeneratorConfig:
    """
    Load the generator configuration from the YAML file and environment variables.

    VUE_I18N_FALLBACK_LOCALE and VUE_I18N_LIB override the file values.

    Returns:
        GeneratorConfig: The resolved configuration.
    """
    project_root = _compute_project_root()
    dotenv_path = _load_dotenv_files(project_root)
    config = _load_yaml_config(project_root)

    logger = _setup_logger_from_config(config)
    if dotenv_path:
        logger.info("Loaded environment variables from: %s", dotenv_path)

    if 'VUE_I18N_FALLBACK_LOCALE' in os.environ:
        config['fallback_locale'] = os.environ['VUE_I18N_FALLBACK_LOCALE']
    if 'VUE_I18N_LIB' in os.environ:
        config['i18n_lib'] = os.environ['VUE_I18N_LIB']

    return GeneratorConfig.from_dict(config, project_root=project_root)
