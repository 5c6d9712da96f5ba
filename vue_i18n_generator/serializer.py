import json
from typing import Any, Dict

from vue_i18n_generator.exceptions import ConfigurationError, EncodingError

FORMAT_ES6 = 'es6'
FORMAT_UMD = 'umd'
FORMAT_JSON = 'json'
SUPPORTED_FORMATS = (FORMAT_ES6, FORMAT_UMD, FORMAT_JSON)


def validate_format(output_format: str) -> str:
    """
    Check an output format before any file is touched.

    Raises:
        ConfigurationError: If the format is not es6, umd or json.
    """
    if output_format not in SUPPORTED_FORMATS:
        raise ConfigurationError(f"Invalid format passed: {output_format}")
    return output_format


def get_umd_module(body: str) -> str:
    """Wrap a JSON document in a UMD module that merges into an existing global."""
    return (
        "(function (global, factory) {\n"
        "    typeof exports === 'object' && typeof module !== 'undefined' ? module.exports = factory() :\n"
        "        typeof define === 'function' && define.amd ? define(factory) :\n"
        "            typeof global.vuei18nLocales === 'undefined' ? global.vuei18nLocales = factory() : "
        "Object.keys(factory()).forEach(function (key) {global.vuei18nLocales[key] = factory()[key]});\n"
        "}(this, (function () { 'use strict';\n"
        f"    return {body}\n"
        "})));"
    )


def get_es6_module(body: str) -> str:
    """Wrap a JSON document in an ES6 module with a default export."""
    return (
        f"const translations = {body}\n"
        "window.translations = translations;\n"
        "\n"
        "export default translations;"
    )


def encode_json(data: Dict[str, Any], output_format: str) -> str:
    """
    Serialize a locale collection and wrap it for the requested format.

    Args:
        data: The locale collection.
        output_format: One of es6, umd or json.

    Returns:
        The document text.

    Raises:
        EncodingError: If the data cannot be written as UTF-8 JSON.
    """
    try:
        json_locales = json.dumps(data, indent=4, ensure_ascii=False) + '\n'
        # Lone surrogates survive json.dumps but cannot be written out
        json_locales.encode('utf-8')
    except (TypeError, ValueError) as encode_exc:
        raise EncodingError(f"Could not generate JSON: {encode_exc}") from encode_exc

    if output_format == FORMAT_ES6:
        return get_es6_module(json_locales)
    if output_format == FORMAT_UMD:
        return get_umd_module(json_locales)
    return json_locales
