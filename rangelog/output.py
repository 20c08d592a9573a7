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
''' Serialization of commit sequences and failures '''
import json
from typing import Any, Dict, Iterable

from rangelog.commit import CommitRecord, format_date
from rangelog.errors import AmbiguousReference, RangeLogError, ReturnCode

FORMATS = ('text', 'json')


def commit_to_text(record: CommitRecord,
                   date_format: str = 'rfc',
                   locale: str = 'en_US') -> str:
    date = format_date(record.author_date, date_format, locale)
    lines = [
        'commit %s' % record.oid,
        'Author: %s <%s>' % (record.author_name, record.author_email),
        'Date:   %s' % date,
        '',
        record.message.rstrip('\n'),
        '',
    ]
    return '\n'.join(lines) + '\n'


def render_text(records: Iterable[CommitRecord], **kwargs) -> str:
    return ''.join(commit_to_text(record, **kwargs) for record in records)


def commit_to_dict(record: CommitRecord) -> Dict[str, Any]:
    return {
        'commit': record.oid,
        'author': record.author_name,
        'email': record.author_email,
        'date': record.author_date.isoformat(),
        'message': record.message,
        'parents': list(record.parents),
    }


def render_json(records: Iterable[CommitRecord]) -> str:
    result = {
        'code': ReturnCode.OK.code,
        'description': ReturnCode.OK.description,
        'commits': [commit_to_dict(record) for record in records],
    }
    return json.dumps(result, indent=2, ensure_ascii=False)


def error_to_text(error: RangeLogError) -> str:
    ''' One diagnostic line, e.g. ``rangelog: Can't parse given range.`` '''
    line = 'rangelog: %s' % error.description
    if isinstance(error, AmbiguousReference):
        line += ' Candidates: %s' % ', '.join(error.candidates)
    elif error.detail:
        line += ' (%s)' % ' '.join(error.detail.split())
    return line


def error_to_json(error: RangeLogError) -> str:
    result: Dict[str, Any] = {
        'code': error.code,
        'description': error.description,
    }
    if isinstance(error, AmbiguousReference):
        result['candidates'] = list(error.candidates)
    return json.dumps(result, indent=2)
