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
''' Utilities for parsing revision ranges given on the command line '''
import unicodedata
from collections import namedtuple
from typing import Optional

SEPARATOR = '..'


class ParsedRange(namedtuple('ParsedRange', ['since', 'until'])):
    ''' Parsed revision range. A lone reference is stored in `until`. '''
    __slots__ = ()

    @property
    def is_empty(self) -> bool:
        return self.since is None and self.until is None

    @property
    def is_single(self) -> bool:
        return self.since is None and self.until is not None

    @property
    def is_range(self) -> bool:
        return self.since is not None and self.until is not None


REJECTED = ParsedRange(None, None)


def _has_forbidden_characters(text: str) -> bool:
    # `~` and `^` are printable, so only whitespace and control characters
    # need to be looked at.
    return any(
        char.isspace() or unicodedata.category(char) == 'Cc' for char in text)


def parse_range(text: Optional[str]) -> ParsedRange:
    ''' Parse `text` into a `ParsedRange`.

        Accepts a single reference (``to``) or a range (``from..to``). Any
        malformed input returns `REJECTED`, no exception is raised.
    '''
    if not text or _has_forbidden_characters(text):
        return REJECTED

    if text.startswith(SEPARATOR) or text.endswith(SEPARATOR):
        return REJECTED

    if SEPARATOR in text:
        parts = text.split(SEPARATOR)
        if len(parts) != 2:
            return REJECTED
        return ParsedRange(*parts)

    return ParsedRange(None, text)


def parse_refs(since: Optional[str], until: Optional[str]) -> ParsedRange:
    ''' Build a `ParsedRange` from separately given ``--from`` and ``--to``
        values. Each one has to be a valid single reference.
    '''
    if until is None:
        return REJECTED

    for ref in (since, until):
        if ref is not None and not parse_range(ref).is_single:
            return REJECTED

    return ParsedRange(since, until)
