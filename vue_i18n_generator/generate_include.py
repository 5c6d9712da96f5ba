"""
Command line entry point: generates a vue-i18n / vuex-i18n compatible
module out of the project translations.
"""
import argparse
import logging
import os
import sys
from typing import List, Optional

from vue_i18n_generator.app_config import GeneratorConfig, load_app_config
from vue_i18n_generator.exceptions import I18nGeneratorError
from vue_i18n_generator.logging_config import LOGGER_NAME
from vue_i18n_generator.generator import Generator
from vue_i18n_generator.serializer import FORMAT_ES6, FORMAT_UMD, validate_format

logger = logging.getLogger(LOGGER_NAME)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='vue-i18n-generate',
        description="Generates a vue-i18n|vuex-i18n compatible js array out of project translations"
    )
    parser.add_argument('--umd', action='store_true', help="Shortcut for --format=umd.")
    parser.add_argument('--multi', action='store_true', help="Write one file per translation file.")
    parser.add_argument('--with-vendor', action='store_true', help="Include vendor package translations.")
    parser.add_argument('--file-name', default=None, help="Output file, relative to the project root.")
    parser.add_argument('--lang-files', default=None, help="Comma separated list of translation files to load.")
    parser.add_argument('--format', default=FORMAT_ES6, help="Output format: es6, umd or json.")
    parser.add_argument('--multi-locales', action='store_true', help="Write one file per locale.")
    return parser


def get_file_name(config: GeneratorConfig, file_name_option: Optional[str]) -> str:
    if file_name_option is not None:
        return config.resolve_path(file_name_option)
    return config.resolve_path(config.js_file)


def handle(args: argparse.Namespace, config: GeneratorConfig) -> int:
    """
    Run the generator for parsed command line options.

    Raises:
        I18nGeneratorError: On an invalid format or any aggregation error.
    """
    output_format = FORMAT_UMD if args.umd else args.format
    validate_format(output_format)

    root = config.lang_root

    if args.multi or args.multi_locales:
        files = Generator(config).generate_multiple(root, output_format, args.multi_locales)
        if config.show_output_messages:
            logger.info("Written to : %s", files)
        return 0

    lang_files = [name.strip() for name in args.lang_files.split(',')] if args.lang_files else None

    data = Generator(config).generate_from_path(root, output_format, args.with_vendor, lang_files)

    js_file = get_file_name(config, args.file_name)
    js_dir = os.path.dirname(js_file)
    if js_dir:
        os.makedirs(js_dir, exist_ok=True)
    with open(js_file, 'w', encoding='utf-8') as f:
        f.write(data)

    if config.show_output_messages:
        logger.info("Written to : %s", js_file)

    return 0


def main(argv: Optional[List[str]] = None, config: Optional[GeneratorConfig] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        # Reject an unknown format before the config file or .env is read
        validate_format(FORMAT_UMD if args.umd else args.format)
        config = config or load_app_config()
        return handle(args, config)
    except I18nGeneratorError as generator_exc:
        logger.error("Generation failed: %s", generator_exc)
        return 1


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
