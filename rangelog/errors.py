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
''' Return codes and the exceptions which carry them '''
import enum
from typing import Iterable


class ReturnCode(enum.Enum):
    ''' Numeric result of one invocation and its human readable meaning. '''

    OK = (0, 'Success')
    UNKNOWN_PROJECT = (1, "Can't find repository with given name.")
    WRONG_RANGE = (2, "Can't parse given range.")
    FROM_NOT_FOUND = (
        3, "First commit from given range wasn't found in given repository.")
    TO_NOT_FOUND = (
        4, "Second commit from given range wasn't found in given repository.")
    AMBIGUOUS_COMMIT_REF = (5, 'Few commits correspond to provided reference.')
    INTERNAL_ERROR = (6, 'Internal inconsistency, please file an issue.')
    MISSING_PROJECT = (7, 'No repository name given.')
    REPOSITORY_ACCESS = (8, 'Failed to read from the repository.')

    def __init__(self, code: int, description: str):
        self.code = code
        self.description = description


class RangeLogError(Exception):
    ''' Base class for every failure reported to the user. '''
    return_code = ReturnCode.INTERNAL_ERROR

    def __init__(self, detail: str = None):
        super().__init__(detail or self.return_code.description)
        self.detail = detail

    @property
    def code(self) -> int:
        return self.return_code.code

    @property
    def description(self) -> str:
        return self.return_code.description


class MissingProject(RangeLogError):
    ''' No repository name supplied. '''
    return_code = ReturnCode.MISSING_PROJECT


class UnknownProject(RangeLogError):
    ''' Repository name is not known to the repository manager. '''
    return_code = ReturnCode.UNKNOWN_PROJECT


class MalformedRange(RangeLogError):
    ''' Range missing or rejected by the range grammar. '''
    return_code = ReturnCode.WRONG_RANGE


class BoundaryNotFound(RangeLogError):
    ''' One side of the range does not resolve to a commit. '''

    def __init__(self, which: str, ref: str = None):
        if which not in ('from', 'to'):
            raise ValueError('Unexpected boundary %r' % which)
        self.which = which
        self.ref = ref
        super().__init__(ref and '%s: %s' % (which, ref))

    @property
    def return_code(self) -> ReturnCode:  # type: ignore[override]
        if self.which == 'from':
            return ReturnCode.FROM_NOT_FOUND
        return ReturnCode.TO_NOT_FOUND


class AmbiguousReference(RangeLogError):
    ''' A reference abbreviation matches more than one object. '''
    return_code = ReturnCode.AMBIGUOUS_COMMIT_REF

    def __init__(self, ref: str, candidates: Iterable[str]):
        self.ref = ref
        self.candidates = tuple(candidates)
        super().__init__('%s: %s' % (ref, ' '.join(self.candidates)))


class InternalInconsistency(RangeLogError):
    ''' A state the parser and resolver contract makes unreachable. '''
    return_code = ReturnCode.INTERNAL_ERROR


class RepositoryAccessError(RangeLogError):
    ''' Reading from the underlying repository failed. '''
    return_code = ReturnCode.REPOSITORY_ACCESS
