#!/usr/bin/env python3
import argparse
import logging
import os
import sys
from pathlib import Path

from atlas_tms.decompose import MalformedUrlError, decompose_all
from atlas_tms.loader import BatchLoadError, StyleBatch, TemplateLoadError, load_template
from atlas_tms.logging_setup import set_up_logging
from atlas_tms.reachability import UnreachableStyleError, check_styles
from atlas_tms.transform import TemplateTransformer, TransformError
from atlas_tms.writer import WriteError, write_tms

logger = logging.getLogger(__name__)

HELP_URL = 'https://help.tableau.com/current/pro/desktop/en-gb/maps_mapsources.htm'
DEFAULT_FILENAME = 'Atlas'

TOOL_ERRORS = (BatchLoadError, TemplateLoadError, MalformedUrlError,
               TransformError, UnreachableStyleError, WriteError)


def default_repository():
    env = os.environ.get('TABLEAU_REPOSITORY')
    if env:
        return env
    return str(Path.home() / 'Documents' / 'My Tableau Repository')


def prompt_repository(prompt=input):
    default = default_repository()
    answer = prompt(f'Where is the Tableau Repository on this machine? ({default}) ').strip()
    return answer or default


def prompt_styles(number, prompt=input):
    urls, names = [], []
    for _ in range(number):
        urls.append(prompt('What is your style URL? ').strip())
        names.append(prompt('What is your style name? ').strip())
    return urls, names


def build_parser():
    p = argparse.ArgumentParser(prog='atlas-tms',
                                description='Create a Tableau mapsource (TMS) from Mapbox Atlas style URLs')
    src = p.add_mutually_exclusive_group()
    src.add_argument('--batch', help='JSON file listing style urls and names')
    src.add_argument('-n', '--number', type=int, help='Number of styles to prompt for')
    p.add_argument('--style', action='append', default=[], help='Style URL (repeatable)')
    p.add_argument('--name', action='append', default=[], help='Style display name (repeatable)')
    p.add_argument('--repository', help='Tableau repository directory')
    p.add_argument('--filename', help=f'Output file name (default {DEFAULT_FILENAME})')
    p.add_argument('--template', help='Mapsource template (default: packaged Template.tms)')
    p.add_argument('--skip-check', action='store_true', help='Do not request the style URLs first')
    p.add_argument('--log-level', default='INFO', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    p.add_argument('--log-dir', help='Also write logs to a timestamped file in this directory')
    return p


def run(args, prompt=input):
    repository, filename = args.repository, args.filename
    if args.batch:
        batch = StyleBatch.load(args.batch)
        urls, names = batch.urls, batch.names
        repository = repository or batch.repository
        filename = filename or batch.filename
    elif args.number:
        if not repository:
            repository = prompt_repository(prompt)
        urls, names = prompt_styles(args.number, prompt)
    else:
        urls, names = args.style, args.name
    repository = repository or default_repository()
    filename = filename or DEFAULT_FILENAME

    styles = decompose_all(urls)
    for index, style in enumerate(styles):
        if not style.token.startswith('pk.'):
            logger.warning(f"Style URL {index} has a token that does not start with 'pk.'")
    transformer = TemplateTransformer(styles, names)

    if not args.skip_check:
        check_styles(urls)

    tms = transformer.apply(load_template(args.template))
    return write_tms(tms, repository, filename)


def main(argv=None, prompt=input):
    p = build_parser()
    args = p.parse_args(argv)
    set_up_logging(getattr(logging, args.log_level), args.log_dir)
    if not (args.batch or args.number or args.style):
        p.error('give --style/--name pairs, --batch or --number')
    if (args.batch or args.number) and (args.style or args.name):
        p.error('--style/--name cannot be combined with --batch or --number')
    try:
        out_path = run(args, prompt)
    except TOOL_ERRORS as e:
        logger.error(f"Error: {e}")
        return 2
    logger.info(f"Atlas files written to {out_path}")
    logger.info(f"Go to {HELP_URL} for help with setting this new TMS as default")
    return 0


if __name__ == '__main__':
    sys.exit(main())
