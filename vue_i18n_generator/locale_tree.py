import copy
import logging
from typing import Any, Dict, Optional

import jsonschema

from vue_i18n_generator.exceptions import DataFormatError
from vue_i18n_generator.logging_config import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

VENDOR_KEY = 'vendor'

# A translation document must be a mapping whose leaves are JSON values.
LOCALE_TREE_SCHEMA = {
    "type": "object",
    "additionalProperties": {"$ref": "#/definitions/node"},
    "definitions": {
        "node": {
            "anyOf": [
                {"type": ["string", "number", "boolean", "null"]},
                {"type": "array", "items": {"$ref": "#/definitions/node"}},
                {"type": "object", "additionalProperties": {"$ref": "#/definitions/node"}}
            ]
        }
    }
}


def validate_locale_tree(data: Any, path: str) -> Dict[str, Any]:
    """
    Check that a decoded translation file is a well-formed translation tree.

    Args:
        data: The decoded file content.
        path: The file the content came from, used in the error message.

    Returns:
        The data, unchanged.

    Raises:
        DataFormatError: If the content is not a mapping of JSON values.
    """
    if not isinstance(data, dict):
        raise DataFormatError(f"Unexpected data while processing {path}: expected a mapping, "
                              f"got {type(data).__name__}")
    try:
        jsonschema.validate(instance=data, schema=LOCALE_TREE_SCHEMA)
    except jsonschema.ValidationError as schema_exc:
        location = '.'.join(str(part) for part in schema_exc.absolute_path) or '<root>'
        raise DataFormatError(f"Unexpected data while processing {path} at '{location}': "
                              f"{schema_exc.message}") from schema_exc
    return data


def merge_locale(existing: Optional[Dict[str, Any]], incoming: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow merge of two trees for the same locale. Keys of `incoming`
    replace those of `existing`.
    """
    if existing is None:
        return incoming
    merged = dict(existing)
    merged.update(incoming)
    return merged


def add_fallback_locale_keys(locale: Dict[str, Any], fallback_locale: Dict[str, Any]) -> Dict[str, Any]:
    """
    Fill keys missing from `locale` with the values of `fallback_locale`.

    Existing leaves and subtrees are kept. The one exception is a leaf in
    `locale` where the fallback holds a subtree: the subtree replaces it.
    Neither input is modified.

    Args:
        locale: The translation tree to complete.
        fallback_locale: The tree supplying default values.

    Returns:
        The merged tree.
    """
    merged = dict(locale)

    for key, value in fallback_locale.items():
        if isinstance(value, dict):
            if isinstance(merged.get(key), dict):
                merged[key] = add_fallback_locale_keys(merged[key], value)
            else:
                # A missing key or a leaf takes the whole fallback subtree
                merged[key] = copy.deepcopy(value)
        elif key not in merged:
            merged[key] = copy.deepcopy(value)

    return merged


def apply_fallback_locale(locales: Dict[str, Dict[str, Any]], fallback_locale: Optional[str]) -> Dict[str, Dict[str, Any]]:
    """Complete every non-fallback locale with the keys of the fallback locale."""
    if not fallback_locale or fallback_locale not in locales:
        logger.debug("Fallback locale '%s' not found, skipping fallback merge.", fallback_locale)
        return locales

    fallback_tree = locales[fallback_locale]
    result = {}
    for locale, data in locales.items():
        if locale != fallback_locale:
            result[locale] = add_fallback_locale_keys(data, fallback_tree)
        else:
            result[locale] = data
    return result


def adjust_vendor(locales: Dict[str, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """
    Move package translations from the top-level "vendor" bucket into each
    locale's own "vendor" key.

    The bucket is shaped {package: {locale: {group: tree}}} and ends up at
    locales[locale]["vendor"][package][group]. The bucket itself is removed.
    """
    if VENDOR_KEY not in locales:
        return locales

    result = {locale: data for locale, data in locales.items() if locale != VENDOR_KEY}
    for vendor, data in locales[VENDOR_KEY].items():
        if not isinstance(data, dict):
            raise DataFormatError(f"Unexpected vendor data for package '{vendor}': expected a mapping of locales.")
        for key, group in data.items():
            if not isinstance(group, dict):
                raise DataFormatError(
                    f"Unexpected vendor data for package '{vendor}', locale '{key}': expected a mapping."
                )
            locale_tree = dict(result.get(key, {}))
            vendor_bucket = dict(locale_tree.get(VENDOR_KEY, {}))
            package_tree = dict(vendor_bucket.get(vendor, {}))
            package_tree.update(group)
            vendor_bucket[vendor] = package_tree
            locale_tree[VENDOR_KEY] = vendor_bucket
            result[key] = locale_tree
            logger.debug("Relocated vendor translations of '%s' into locale '%s'.", vendor, key)

    return result
