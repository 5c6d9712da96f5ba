import re
from typing import Any, Dict

from vue_i18n_generator.app_config import VUEX_I18N, DEFAULT_ESCAPE_CHAR

PIPE_PATTERN = re.compile(r'\s*\|\s*')
THREE_COLONS = ' ::: '


class StringRewriter:
    """
    Turns Laravel style ":link" placeholders into vue-i18n style "{link}",
    and pluralization pipes into the vuex-i18n " ::: " separator when that
    library is targeted.
    """

    def __init__(self, i18n_lib: str, escape_char: str = DEFAULT_ESCAPE_CHAR):
        self.i18n_lib = i18n_lib
        self.escape_char = escape_char
        escaped = re.escape(escape_char)
        # Look-behinds must be fixed width, so each exclusion gets its own.
        # Placeholder names are ASCII word characters only.
        self._placeholder_pattern = re.compile(rf'(?<!mailto)(?<!tel)(?<!{escaped}):(\w+)', re.ASCII)
        self._escaped_placeholder_pattern = re.compile(rf'{escaped}(:\w+)', re.ASCII)

    def adjust_string(self, string: str) -> str:
        """
        Convert the placeholder syntax of a single string.

        Args:
            string: The raw translation string.

        Returns:
            The string with ":name" rewritten to "{name}", except after
            "mailto", "tel" or the escape character.
        """
        if self.i18n_lib == VUEX_I18N:
            string = PIPE_PATTERN.sub(THREE_COLONS, string)

        return self._placeholder_pattern.sub(r'{\1}', string)

    def remove_escape_character(self, string: str) -> str:
        """
        Strip the escape character from sequences that look like ":link" but
        were escaped so they would not be read as placeholders.
        """
        return self._escaped_placeholder_pattern.sub(r'\1', string)

    def rewrite(self, string: str) -> str:
        return self.remove_escape_character(self.adjust_string(string))

    def adjust_value(self, value: Any) -> Any:
        if isinstance(value, dict):
            return self.adjust_tree(value)
        if isinstance(value, list):
            return [self.adjust_value(item) for item in value]
        if isinstance(value, str):
            return self.rewrite(value)
        return value

    def adjust_tree(self, tree: Dict[str, Any]) -> Dict[str, Any]:
        """Rewrite every key and string value of a translation tree, recursively."""
        result = {}
        for key, value in tree.items():
            result[self.rewrite(key)] = self.adjust_value(value)
        return result
