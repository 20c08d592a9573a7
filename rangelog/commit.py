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
''' Immutable commit snapshots and their date rendering '''

import email.utils
from collections import namedtuple
from datetime import datetime

import babel.dates
import git

CommitRecord = namedtuple('CommitRecord', [
    'oid',
    'author_name',
    'author_email',
    'author_date',
    'message',
    'parents',
])


def _text(value) -> str:
    if isinstance(value, bytes):
        return value.decode('utf-8', errors='replace')
    return value


def to_record(commit: git.Commit) -> CommitRecord:
    ''' Snapshot the metadata of a GitPython commit object '''
    author = commit.author
    return CommitRecord(commit.hexsha,
                        _text(author.name),
                        _text(author.email),
                        commit.authored_datetime,
                        _text(commit.message),
                        tuple(parent.hexsha for parent in commit.parents))


def format_date(date: datetime, date_format: str = 'rfc',
                locale: str = 'en_US') -> str:
    ''' Render `date` either as RFC 2822 (``rfc``) or through babel, where
        `date_format` is ``short``, ``medium``, ``long``, ``full`` or a
        babel datetime pattern.
    '''
    if date_format == 'rfc':
        return email.utils.format_datetime(date)
    return babel.dates.format_datetime(date,
                                       format=date_format,
                                       tzinfo=date.tzinfo,
                                       locale=locale)
