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
''' Resolve a parsed range against a repository and collect its commits '''
import itertools
import logging
from collections import namedtuple
from typing import Optional

from rangelog.cli import ParsedRange
from rangelog.commit import CommitRecord
from rangelog.config import MAX_COMMITS
from rangelog.errors import (AmbiguousReference, BoundaryNotFound,
                             InternalInconsistency, MalformedRange,
                             MissingProject)
from rangelog.vcs import (Ambiguous, NotFound, Repository, Unique,
                          open_repository)

LOG = logging.getLogger('rangelog')

ResolvedRange = namedtuple('ResolvedRange', ['since', 'until'])


def _resolve(repo: Repository, text: str, which: str) -> str:
    resolution = repo.resolve(text)
    if isinstance(resolution, Unique):
        return resolution.oid
    if isinstance(resolution, Ambiguous):
        raise AmbiguousReference(text, resolution.candidates)
    if isinstance(resolution, NotFound):
        raise BoundaryNotFound(which, text)
    raise InternalInconsistency('Unexpected resolution %r' % (resolution, ))


def resolve_range(parsed: ParsedRange, repo: Repository) -> ResolvedRange:
    ''' Resolve both sides of `parsed` to commit ids.

        The ``to`` side is resolved first. Failures raise `MalformedRange`,
        `BoundaryNotFound`, `AmbiguousReference` or `InternalInconsistency`.
    '''
    if parsed.is_empty:
        raise MalformedRange()
    if parsed.until is None:
        # The parser never stores a lone reference in `since`
        raise InternalInconsistency('Range without an end: %r' % (parsed, ))

    until = _resolve(repo, parsed.until, 'to')
    since = None
    if parsed.since is not None:
        since = _resolve(repo, parsed.since, 'from')
    return ResolvedRange(since, until)


def commits_for_range(parsed: ParsedRange,
                      repo: Repository,
                      max_count: Optional[int] = MAX_COMMITS
                      ) -> list[CommitRecord]:
    ''' Return the commits of `parsed` newest first.

        A single reference, or a range whose ends resolve to the same commit,
        yields just that commit. For ``from..to`` the ``to`` commit comes
        first, followed by its ancestors which are not reachable from
        ``from``. At most `max_count` commits are returned.
    '''
    resolved = resolve_range(parsed, repo)
    last = repo.record(resolved.until)

    if resolved.since is None or resolved.since == resolved.until:
        LOG.debug('Single commit %s', resolved.until)
        return [last]

    LOG.debug('Commits between %s and %s', resolved.since, resolved.until)
    interior = (record
                for record in repo.walk(resolved.until, resolved.since)
                if record.oid != last.oid)
    result = [last]
    if max_count is None:
        result.extend(interior)
        return result

    result.extend(itertools.islice(interior, max(max_count - 1, 0)))
    if len(result) >= max_count and next(interior, None) is not None:
        LOG.warning('Output truncated to %d commits', max_count)
    return result[:max_count]


def git_log(base_path: str,
            project: Optional[str],
            parsed: Optional[ParsedRange],
            max_count: Optional[int] = MAX_COMMITS) -> list[CommitRecord]:
    ''' Return the commits of `parsed` in the repository `project`.

        `parsed` is `None` when no range was given at all. The repository is
        released on every exit path.
    '''
    if not project:
        raise MissingProject()
    if parsed is None:
        raise MalformedRange()

    with open_repository(base_path, project) as repo:
        return commits_for_range(parsed, repo, max_count)
