#!/usr/bin/env python3
#
# Copyright (c) 2021 Bahtiar `kalkin-` Gadimov.
#
# This file is part of Range Log.
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as
# published by the Free Software Foundation, either version 3 of the
# License, or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <http://www.gnu.org/licenses/>.
#
"""rangelog - print the commits of a revision range of a hosted repository

Usage:
    rangelog [options] [--project=NAME] [--from=REF] [--to=REF] [<range>]
    rangelog [options] <name> <range>
    rangelog --version

Options:
    <range>                   A commit (to) or a range of commits (from..to)
    -p NAME, --project=NAME   Name of the repository, a trailing .git is ignored
    --from=REF                Oldest commit of the range, not printed
    --to=REF                  Newest commit of the range, printed first
    -f FMT, --format=FMT      Output format, text or json
    -n N, --max-count=N       Print at most N commits
    -b DIR, --base-path=DIR   Directory holding the repositories
    -d --debug                Print debugging output to stderr
"""
import logging
import os
import sys
from typing import List, Optional

from docopt import DocoptExit, docopt

from rangelog import __version__
from rangelog.cli import REJECTED, parse_range, parse_refs
from rangelog.config import CONFIG
from rangelog.errors import RangeLogError
from rangelog.log import git_log
from rangelog.output import (FORMATS, error_to_json, error_to_text,
                             render_json, render_text)

LOG = logging.getLogger('rangelog')


def configure_logging(debug: bool = False) -> None:
    LOG.setLevel(logging.CRITICAL)
    if debug:
        LOG.setLevel(logging.DEBUG)
        if not LOG.handlers:
            handler = logging.StreamHandler(sys.stderr)
            # set a formatter to include the level name
            handler.setFormatter(
                logging.Formatter('[%(levelname)s] %(message)s'))
            LOG.addHandler(handler)


def _max_count(value: Optional[str]) -> int:
    value = value or CONFIG['log']['max_count']
    try:
        result = int(value)
    except ValueError:
        result = 0
    if result < 1:
        raise DocoptExit('--max-count expects a positive number, got %r' %
                         value)
    return result


def _output_format(value: Optional[str]) -> str:
    value = value or CONFIG['log']['format']
    if value not in FORMATS:
        raise DocoptExit('--format expects one of %s, got %r' %
                         (', '.join(FORMATS), value))
    return value


def _base_path(value: Optional[str]) -> str:
    value = value or CONFIG['repositories']['base_path'] or os.getcwd()
    return os.path.abspath(os.path.expanduser(value))


def _parsed_input(arguments: dict):
    ''' Return the parsed range, `None` when nothing was given at all '''
    text = arguments['<range>']
    since, until = arguments['--from'], arguments['--to']
    if text is None and since is None and until is None:
        return None
    if text is not None:
        if since is not None or until is not None:
            LOG.info('Both a range and --from/--to given')
            return REJECTED
        return parse_range(text)
    return parse_refs(since, until)


def run(arguments: dict, stdout=None, stderr=None) -> int:
    ''' Execute the command for docopt `arguments`, return the exit code '''
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    output_format = _output_format(arguments['--format'])
    max_count = _max_count(arguments['--max-count'])
    base_path = _base_path(arguments['--base-path'])
    project = arguments['--project'] or arguments['<name>']

    try:
        records = git_log(base_path, project, _parsed_input(arguments),
                          max_count)
    except RangeLogError as exc:
        LOG.debug('%s failed: %r', project, exc)
        if output_format == 'json':
            print(error_to_json(exc), file=stdout)
        else:
            print(error_to_text(exc), file=stderr)
        return exc.code

    if output_format == 'json':
        print(render_json(records), file=stdout)
    else:
        stdout.write(
            render_text(records,
                        date_format=CONFIG['date']['format'],
                        locale=CONFIG['date']['locale']))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    arguments = docopt(__doc__, argv=argv, version=__version__)
    configure_logging(arguments['--debug'])
    try:
        return run(arguments)
    except KeyboardInterrupt:
        return 130


def cli():
    sys.exit(main())


if __name__ == '__main__':
    cli()
