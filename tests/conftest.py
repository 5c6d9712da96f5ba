import os
import shutil
import tempfile
import textwrap

import pytest

from vue_i18n_generator.app_config import GeneratorConfig


def _write_files(root, files):
    """Create files below `root` from a {relative_path: content} mapping."""
    for relative_path, content in files.items():
        file_path = os.path.join(root, *relative_path.split('/'))
        os.makedirs(os.path.dirname(file_path), exist_ok=True)
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(textwrap.dedent(content).lstrip())


@pytest.fixture
def write_files():
    """Returns a helper that creates files below a root directory."""
    return _write_files


@pytest.fixture
def project_root():
    """Function-scoped temporary project directory."""
    temp_dir = tempfile.mkdtemp(prefix='vue_i18n_test_')
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def lang_root(project_root):
    """A populated resources/lang directory with two YAML locales and a JSON locale."""
    root = os.path.join(project_root, 'resources', 'lang')
    _write_files(root, {
        'en/auth.yaml': """
            failed: These credentials do not match our records.
            throttle: Too many attempts. Try again in :seconds seconds.
        """,
        'en/messages.yaml': """
            welcome: Hello :name
            contact: "Mail us at mailto:support"
            nested:
              deep: Deep value
        """,
        'en/validation/custom.yaml': """
            required: The :attribute field is required.
        """,
        'fr/auth.yaml': """
            failed: Ces identifiants ne correspondent pas.
        """,
        'de.json': """
            {"Welcome": "Willkommen :name"}
        """,
        'README.md': "Not a translation file\n",
        '.gitignore': "*.swp\n",
    })
    return root


@pytest.fixture
def generator_config(project_root):
    return GeneratorConfig(project_root=project_root, fallback_locale='en')
