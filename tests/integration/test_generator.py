"""
Integration tests for the Generator: a language directory on disk in,
a locale document (or a set of module files) out.
"""
import json
import os
from unittest.mock import patch

import pytest

from vue_i18n_generator.app_config import GeneratorConfig
from vue_i18n_generator.exceptions import ConfigurationError, DataFormatError
from vue_i18n_generator.generator import Generator


def _strip_es6(output):
    prefix = "const translations = "
    suffix = "\nwindow.translations = translations;\n\nexport default translations;"
    assert output.startswith(prefix)
    assert output.endswith(suffix)
    return json.loads(output[len(prefix):-len(suffix)])


class TestGenerateFromPath:

    def test_json_output(self, lang_root, generator_config):
        output = Generator(generator_config).generate_from_path(lang_root, 'json')
        locales = json.loads(output)

        assert list(locales) == ['de', 'en', 'fr']
        assert locales['en']['messages']['welcome'] == "Hello {name}"
        assert locales['en']['messages']['contact'] == "Mail us at mailto:support"
        # fr is completed from the en fallback without losing its own values
        assert locales['fr']['auth']['failed'] == "Ces identifiants ne correspondent pas."
        assert locales['fr']['auth']['throttle'] == "Too many attempts. Try again in {seconds} seconds."
        assert locales['fr']['messages'] == locales['en']['messages']
        assert locales['de']['Welcome'] == "Willkommen {name}"
        assert locales['de']['validation'] == locales['en']['validation']

    def test_default_format_is_es6(self, lang_root, generator_config):
        output = Generator(generator_config).generate_from_path(lang_root)
        assert _strip_es6(output)['en']['auth']['failed'] == "These credentials do not match our records."

    def test_umd_output(self, lang_root, generator_config):
        output = Generator(generator_config).generate_from_path(lang_root, 'umd')
        assert output.startswith("(function (global, factory) {")
        assert '"Willkommen {name}"' in output

    def test_vuex_dialect_and_escape_character(self, project_root, write_files):
        root = os.path.join(project_root, 'lang')
        write_files(root, {
            'en/messages.yaml': """
                apples: "one apple | :count apples"
                literal: "Don't #:break this"
            """,
        })
        config = GeneratorConfig(project_root=project_root, i18n_lib='vuex-i18n', escape_char='#')
        locales = json.loads(Generator(config).generate_from_path(root, 'json'))

        assert locales['en']['messages'] == {
            "apples": "one apple ::: {count} apples",
            "literal": "Don't :break this",
        }

    def test_yaml_scalars_reach_the_output_as_text(self, project_root, write_files):
        root = os.path.join(project_root, 'lang')
        write_files(root, {
            'en/common.yaml': """
                yes: Yes
                no: No
                toggle: On
                version: 1.10
                released: 2020-01-01
            """,
        })
        config = GeneratorConfig(project_root=project_root)
        locales = json.loads(Generator(config).generate_from_path(root, 'json'))

        assert locales == {"en": {"common": {
            "yes": "Yes",
            "no": "No",
            "toggle": "On",
            "version": "1.10",
            "released": "2020-01-01",
        }}}

    def test_without_fallback_locale(self, lang_root, project_root):
        config = GeneratorConfig(project_root=project_root, fallback_locale=None)
        locales = json.loads(Generator(config).generate_from_path(lang_root, 'json'))
        assert locales['fr'] == {"auth": {"failed": "Ces identifiants ne correspondent pas."}}

    def test_lang_files_option(self, lang_root, generator_config):
        locales = json.loads(Generator(generator_config).generate_from_path(lang_root, 'json', lang_files=['auth']))
        assert 'messages' not in locales['en']
        assert 'auth' in locales['en']

    def test_with_vendor(self, lang_root, generator_config, write_files):
        write_files(lang_root, {
            'vendor/courier/en/mail.yaml': "sent: Sent to :address\n",
            'vendor/courier/fr/mail.yaml': "sent: Envoyé à :address\n",
        })
        locales = json.loads(Generator(generator_config).generate_from_path(lang_root, 'json', with_vendor=True))

        assert 'vendor' not in locales
        assert locales['en']['vendor'] == {"courier": {"mail": {"sent": "Sent to {address}"}}}
        assert locales['fr']['vendor'] == {"courier": {"mail": {"sent": "Envoyé à {address}"}}}

    def test_invalid_format_fails_before_any_io(self, generator_config):
        with patch('vue_i18n_generator.generator.load_locales') as mock_load, \
                patch('os.path.isdir') as mock_isdir:
            with pytest.raises(ConfigurationError, match="xml"):
                Generator(generator_config).generate_from_path('/does/not/matter', 'xml')
        mock_load.assert_not_called()
        mock_isdir.assert_not_called()

    def test_missing_directory(self, project_root, generator_config):
        with pytest.raises(ConfigurationError, match="Directory not found"):
            Generator(generator_config).generate_from_path(os.path.join(project_root, 'missing'), 'json')

    def test_bad_file_aborts_the_run(self, lang_root, generator_config, write_files):
        write_files(lang_root, {'es.json': "[1, 2, 3]"})
        with pytest.raises(DataFormatError, match="es.json"):
            Generator(generator_config).generate_from_path(lang_root, 'json')


class TestGenerateMultiple:

    def test_one_file_per_namespace(self, lang_root, generator_config):
        created = Generator(generator_config).generate_multiple(lang_root, 'json')

        js_path = generator_config.resolve_path(generator_config.js_path)
        expected = [os.path.join(js_path, f"{name}.js") for name in ('auth', 'messages', 'validation_custom')]
        assert sorted(created.splitlines()) == expected
        assert created.endswith('\n')

        with open(os.path.join(js_path, 'auth.js'), encoding='utf-8') as f:
            auth = json.load(f)
        assert list(auth) == ['en', 'fr']
        assert auth['fr']['throttle'] == "Too many attempts. Try again in {seconds} seconds."
        assert auth['fr']['failed'] == "Ces identifiants ne correspondent pas."

        with open(os.path.join(js_path, 'messages.js'), encoding='utf-8') as f:
            assert list(json.load(f)) == ['en']

    def test_one_file_per_locale(self, lang_root, generator_config):
        created = Generator(generator_config).generate_multiple(lang_root, 'es6', multi_locales=True)

        js_path = generator_config.resolve_path(generator_config.js_path)
        assert sorted(created.splitlines()) == [os.path.join(js_path, 'en.js'), os.path.join(js_path, 'fr.js')]

        with open(os.path.join(js_path, 'fr.js'), encoding='utf-8') as f:
            fr = _strip_es6(f.read())
        assert list(fr) == ['fr']
        assert fr['fr']['auth']['failed'] == "Ces identifiants ne correspondent pas."
        assert fr['fr']['messages']['welcome'] == "Hello {name}"
        assert fr['fr']['validation_custom']['required'] == "The {attribute} field is required."

    def test_existing_files_are_overwritten(self, lang_root, generator_config):
        js_path = generator_config.resolve_path(generator_config.js_path)
        os.makedirs(js_path, exist_ok=True)
        with open(os.path.join(js_path, 'auth.js'), 'w', encoding='utf-8') as f:
            f.write("stale content that is much longer than anything the generator writes" * 100)

        Generator(generator_config).generate_multiple(lang_root, 'json')

        with open(os.path.join(js_path, 'auth.js'), encoding='utf-8') as f:
            assert 'stale' not in f.read()

    def test_vendor_is_never_included(self, lang_root, generator_config, write_files):
        write_files(lang_root, {'vendor/courier/en/mail.yaml': "sent: Sent\n"})
        created = Generator(generator_config).generate_multiple(lang_root, 'json')
        names = [os.path.basename(path) for path in created.splitlines()]
        assert 'mail.js' not in names
        assert 'courier_en_mail.js' not in names
        assert sorted(names) == ['auth.js', 'messages.js', 'validation_custom.js']

    def test_invalid_format(self, lang_root, generator_config):
        with pytest.raises(ConfigurationError):
            Generator(generator_config).generate_multiple(lang_root, 'xml')
