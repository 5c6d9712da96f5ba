"""
Directory walker and per-file loaders.

A language root holds one entry per locale: either a directory of YAML files
(nested subdirectories become nested keys) or a `<locale>.json` document.
"""
import json
import logging
import os
from typing import Any, Dict, Iterable, List, Optional

import yaml

from vue_i18n_generator.app_config import GeneratorConfig
from vue_i18n_generator.exceptions import DataFormatError
from vue_i18n_generator.logging_config import LOGGER_NAME
from vue_i18n_generator.locale_tree import VENDOR_KEY, merge_locale, validate_locale_tree
from vue_i18n_generator.string_rewriter import StringRewriter

logger = logging.getLogger(LOGGER_NAME)

JSON_EXTENSION = '.json'
DATA_FILE_EXTENSIONS = ('.yaml', '.yml')


def remove_extension(filename: str) -> str:
    """Return the filename with its last extension stripped."""
    position = filename.rfind('.')
    if position == -1:
        return filename
    return filename[:position]


def _sorted_entries(path: str) -> List[str]:
    """Names of the non-dot entries of a directory, sorted."""
    return sorted(name for name in os.listdir(path) if not name.startswith('.'))


def should_ignore_lang_file(name: str, config: GeneratorConfig, lang_files: Optional[Iterable[str]] = None) -> bool:
    """
    Decide whether a data file is left out, given its name without extension.

    A `lang_files` override has priority over the configured allow-list and
    the exclude list.
    """
    if lang_files:
        return name not in lang_files

    return (bool(config.lang_files) and name not in config.lang_files) or name in config.excludes


def load_json_file(path: str, rewriter: StringRewriter) -> Optional[Dict[str, Any]]:
    """
    Load a `<locale>.json` document.

    Returns:
        The rewritten tree, or None when the file is not a JSON file.

    Raises:
        DataFormatError: If the file cannot be decoded or is not an object.
    """
    # Ignore non *.json files (ex.: .gitignore, vim swap files etc.)
    if os.path.splitext(path)[1] != JSON_EXTENSION:
        logger.debug("Skipping non-JSON file '%s'.", path)
        return None

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as decode_exc:
        raise DataFormatError(f"Could not decode JSON file {path}: {decode_exc}") from decode_exc

    return rewriter.adjust_tree(validate_locale_tree(data, path))


def load_data_file(path: str, rewriter: StringRewriter) -> Dict[str, Any]:
    """
    Parse a YAML translation file into a rewritten tree.

    BaseLoader keeps every scalar a string, so "yes", "1.10" or
    "2020-01-01" reach the output exactly as written.

    Raises:
        DataFormatError: If the file is not valid YAML or not a mapping.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.load(f, Loader=yaml.BaseLoader)
    except (yaml.YAMLError, UnicodeDecodeError) as decode_exc:
        raise DataFormatError(f"Could not parse data file {path}: {decode_exc}") from decode_exc

    return rewriter.adjust_tree(validate_locale_tree(data, path))


def output_file_key(locale_root: str, file_path: str) -> str:
    """
    Name of the output file for a data file in multi-file mode: its path
    relative to the locale directory, extension stripped, separators
    flattened to underscores.
    """
    relative = os.path.relpath(file_path, locale_root)
    return remove_extension(relative.replace(os.sep, '_').replace('/', '_'))


def load_locale_directory(
        path: str,
        locale: str,
        config: GeneratorConfig,
        rewriter: StringRewriter,
        lang_files: Optional[Iterable[str]] = None,
        files_to_create: Optional[Dict[str, Dict[str, Any]]] = None,
        multi_locales: bool = False,
        locale_root: Optional[str] = None
) -> Dict[str, Any]:
    """
    Recursively load a locale directory into a nested tree.

    Args:
        path: The directory to load.
        locale: The locale the directory belongs to.
        config: The generator configuration.
        rewriter: The string rewriter applied to every loaded file.
        lang_files: Optional allow-list of file names overriding the configuration.
        files_to_create: When given, every loaded file is also recorded here,
            keyed by output file name (see `output_file_key`).
        multi_locales: Record files under their locale instead of their name.
        locale_root: The top directory of the locale, used for output file names.

    Returns:
        The translation tree of the directory.
    """
    locale_root = locale_root or path
    data = {}

    for name in _sorted_entries(path):
        entry_path = os.path.join(path, name)

        if os.path.isdir(entry_path):
            data[name] = load_locale_directory(
                entry_path, locale, config, rewriter, lang_files,
                files_to_create, multi_locales, locale_root
            )
            continue

        # Ignore anything but data files (ex.: .gitignore, vim swap files etc.)
        if os.path.splitext(name)[1] not in DATA_FILE_EXTENSIONS:
            logger.debug("Skipping unsupported file '%s'.", entry_path)
            continue

        no_ext = remove_extension(name)
        if should_ignore_lang_file(no_ext, config, lang_files):
            logger.debug("Skipping filtered language file '%s'.", entry_path)
            continue

        content = load_data_file(entry_path, rewriter)
        logger.debug("Loaded '%s' for locale '%s'.", entry_path, locale)

        if files_to_create is not None:
            file_key = output_file_key(locale_root, entry_path)
            if multi_locales:
                files_to_create.setdefault(locale, {}).setdefault(locale, {})[file_key] = content
            else:
                files_to_create.setdefault(file_key, {})[locale] = content

        data[no_ext] = content

    return data


def load_locales(
        root: str,
        config: GeneratorConfig,
        with_vendor: bool = False,
        lang_files: Optional[Iterable[str]] = None,
        files_to_create: Optional[Dict[str, Dict[str, Any]]] = None,
        multi_locales: bool = False
) -> Dict[str, Dict[str, Any]]:
    """
    Walk a language root and build the collection of locale trees.

    Entries are visited in name order. When two entries yield the same
    locale (`en/` and `en.json`), their trees are merged and the later
    entry wins on conflicting keys.

    Args:
        root: The language root directory.
        config: The generator configuration.
        with_vendor: Load the reserved "vendor" entry too.
        lang_files: Optional allow-list of file names overriding the configuration.
        files_to_create: Optional index filled for multi-file output.
        multi_locales: Index by locale instead of by file name.

    Returns:
        A mapping of locale code to translation tree.
    """
    rewriter = StringRewriter(config.i18n_lib, config.escape_char)
    lang_files = list(lang_files) if lang_files else None
    locales: Dict[str, Dict[str, Any]] = {}

    for name in _sorted_entries(root):
        if name in config.excludes or (name == VENDOR_KEY and not with_vendor):
            logger.debug("Skipping excluded entry '%s'.", name)
            continue

        no_extension = remove_extension(name)
        if not no_extension:
            continue

        entry_path = os.path.join(root, name)
        if os.path.isdir(entry_path):
            local = load_locale_directory(
                entry_path, no_extension, config, rewriter, lang_files,
                files_to_create, multi_locales
            )
        else:
            local = load_json_file(entry_path, rewriter)
            if local is None:
                continue

        locales[no_extension] = merge_locale(locales.get(no_extension), local)

    return locales
