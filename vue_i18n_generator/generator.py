import logging
import os
from typing import Any, Dict, Iterable, Optional

from tqdm import tqdm

from vue_i18n_generator.app_config import GeneratorConfig
from vue_i18n_generator.exceptions import ConfigurationError
from vue_i18n_generator.logging_config import LOGGER_NAME
from vue_i18n_generator.locale_loader import load_locales
from vue_i18n_generator.locale_tree import add_fallback_locale_keys, adjust_vendor, apply_fallback_locale
from vue_i18n_generator.serializer import FORMAT_ES6, encode_json, validate_format

logger = logging.getLogger(LOGGER_NAME)


def _require_directory(path: str) -> None:
    if not os.path.isdir(path):
        raise ConfigurationError(f"Directory not found: {path}")


class Generator:
    """Builds vue-i18n / vuex-i18n locale modules out of a language directory."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or GeneratorConfig()

    def generate_from_path(
            self,
            path: str,
            output_format: str = FORMAT_ES6,
            with_vendor: bool = False,
            lang_files: Optional[Iterable[str]] = None
    ) -> str:
        """
        Collect every locale under `path` into a single document.

        Args:
            path: The language root directory.
            output_format: One of es6, umd or json.
            with_vendor: Include the "vendor" package translations.
            lang_files: Optional allow-list of file names to load.

        Returns:
            The document text.
        """
        validate_format(output_format)
        _require_directory(path)

        lang_files = list(lang_files) if lang_files else None
        locales = load_locales(path, self.config, with_vendor=with_vendor, lang_files=lang_files)
        logger.info("Loaded %d locale(s) from '%s'.", len(locales), path)

        locales = adjust_vendor(locales)
        locales = apply_fallback_locale(locales, self.config.fallback_locale)

        return encode_json(locales, output_format)

    def generate_multiple(self, path: str, output_format: str = FORMAT_ES6, multi_locales: bool = False) -> str:
        """
        Write one module per translation file (or per locale with
        `multi_locales`) under the configured js_path.

        Returns:
            The written file paths, one per line.
        """
        validate_format(output_format)
        _require_directory(path)

        files_to_create: Dict[str, Dict[str, Any]] = {}
        load_locales(path, self.config, files_to_create=files_to_create, multi_locales=multi_locales)

        js_path = self.config.resolve_path(self.config.js_path)
        created_files = ''

        for file_name, data in tqdm(files_to_create.items(), desc="Writing locale modules", unit="file",
                                    disable=not self.config.show_output_messages):
            data = self._apply_fallback_to_file(file_name, data, files_to_create, multi_locales)

            file_to_create = os.path.join(js_path, f"{file_name}.js")
            js_body = encode_json(data, output_format)

            os.makedirs(os.path.dirname(file_to_create), exist_ok=True)
            with open(file_to_create, 'w', encoding='utf-8') as f:
                f.write(js_body)
            logger.info("Written to: %s", file_to_create)

            created_files += file_to_create + '\n'

        return created_files

    def _apply_fallback_to_file(
            self,
            file_name: str,
            data: Dict[str, Any],
            files_to_create: Dict[str, Dict[str, Any]],
            multi_locales: bool
    ) -> Dict[str, Any]:
        fallback_locale = self.config.fallback_locale
        if not fallback_locale:
            return data

        if multi_locales:
            # One file per locale: {locale: {namespace: tree}}
            fallback_tree = files_to_create.get(fallback_locale, {}).get(fallback_locale)
            if fallback_tree is None or file_name == fallback_locale:
                return data
            return {file_name: add_fallback_locale_keys(data[file_name], fallback_tree)}

        # One file per namespace: {locale: tree}
        return apply_fallback_locale(data, fallback_locale)
