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
''' Access to the repositories below a base directory, done with GitPython '''
import contextlib
import logging
import os
import os.path
import re
from collections import namedtuple
from typing import Iterator, Optional, Set, Union

import git

from rangelog.commit import CommitRecord, to_record
from rangelog.errors import RepositoryAccessError, UnknownProject

LOG = logging.getLogger('rangelog')

__all__ = [
    "Ambiguous",
    "list_repositories",
    "NotFound",
    "open_repository",
    "project_name",
    "Repository",
    "Unique",
]

Unique = namedtuple('Unique', ['oid'])
Ambiguous = namedtuple('Ambiguous', ['candidates'])
NotFound = namedtuple('NotFound', ['ref'])
Resolution = Union[Unique, Ambiguous, NotFound]

# An abbreviated object id, optionally followed by `~N` / `^` suffixes
ABBREV_OID = re.compile(r'^([0-9a-fA-F]{4,39})(?:[~^].*)?$')

_GIT_ERRORS = (git.GitCommandError, git.BadName, git.BadObject, ValueError,
               OSError)


def project_name(name: str) -> str:
    ''' Strip a trailing ``.git`` '''
    if name.endswith('.git'):
        return name[:-len('.git')]
    return name


def _is_repository(path: str) -> bool:
    if os.path.exists(os.path.join(path, '.git')):
        return True
    return all(
        os.path.exists(os.path.join(path, part))
        for part in ('HEAD', 'objects', 'refs'))


def list_repositories(base_path: str) -> Set[str]:
    ''' Return the names of all repositories below `base_path`.

        Bare repositories are named after their directory without the
        ``.git`` suffix, non-bare ones after the directory holding ``.git``.
        Nested names use ``/`` as separator.
    '''
    result: Set[str] = set()
    for root, dirs, _ in os.walk(base_path):
        if os.path.samefile(root, base_path):
            dirs[:] = [d for d in dirs if d != '.git']
            continue
        if _is_repository(root):
            name = os.path.relpath(root, base_path).replace(os.sep, '/')
            result.add(project_name(name))
            dirs[:] = []
    LOG.debug('Found %d repositories in %s', len(result), base_path)
    return result


def _repository_path(base_path: str, name: str) -> Optional[str]:
    for candidate in (name + '.git', name):
        path = os.path.join(base_path, *candidate.split('/'))
        if os.path.isdir(path) and _is_repository(path):
            return path
    return None


class Repository:
    ''' A wrapper around `git.Repo` providing reference resolution, commit
        lookup and the ancestor walk.
    '''

    def __init__(self, path: str) -> None:
        self.path = path
        try:
            self._nrepo = git.Repo(path, odbt=git.GitCmdObjectDB)
        except (git.InvalidGitRepositoryError, git.NoSuchPathError) as exc:
            raise RepositoryAccessError('%s: %s' % (path, exc)) from exc

    def close(self) -> None:
        self._nrepo.close()

    def resolve(self, text: str) -> Resolution:
        ''' Resolve `text` to a commit id.

            Returns `Unique`, `NotFound` or, for an abbreviated id matching
            more than one object, `Ambiguous` with every candidate.
        '''
        if text.startswith('-'):
            return NotFound(text)

        try:
            oid = self._nrepo.git.rev_parse('%s^{commit}' % text,
                                            verify=True,
                                            quiet=True)
            LOG.debug('Resolved %r to %s', text, oid)
            return Unique(oid.strip())
        except git.GitCommandError as exc:
            if exc.status != 1:
                raise RepositoryAccessError(str(exc)) from exc

        match = ABBREV_OID.match(text)
        if match:
            candidates = self._disambiguate(match.group(1))
            if len(candidates) > 1:
                LOG.info('%r is ambiguous: %s', text, candidates)
                return Ambiguous(tuple(candidates))

        LOG.debug('Failed to resolve %r', text)
        return NotFound(text)

    def _disambiguate(self, prefix: str) -> list[str]:
        try:
            output = self._nrepo.git.rev_parse('--disambiguate=%s' %
                                               prefix.lower())
        except git.GitCommandError as exc:
            raise RepositoryAccessError(str(exc)) from exc
        return output.split()

    def record(self, oid: str) -> CommitRecord:
        ''' Return the `CommitRecord` for a resolved commit id '''
        try:
            return to_record(self._nrepo.commit(oid))
        except _GIT_ERRORS as exc:
            raise RepositoryAccessError(str(exc)) from exc

    def walk(self,
             start: str,
             stop_before: Optional[str] = None) -> Iterator[CommitRecord]:
        ''' Lazily yield `start` and its ancestors newest first in
            topological order, leaving out everything reachable from
            `stop_before`.
        '''
        rev = start
        if stop_before:
            rev = '%s..%s' % (stop_before, start)
        LOG.debug('Walking %s', rev)
        try:
            for commit in self._nrepo.iter_commits(rev, topo_order=True):
                yield to_record(commit)
        except _GIT_ERRORS as exc:
            raise RepositoryAccessError(str(exc)) from exc


@contextlib.contextmanager
def open_repository(base_path: str, name: str) -> Iterator[Repository]:
    ''' Open the repository called `name` below `base_path`. The repository
        is closed again on every exit path.
    '''
    name = project_name(name)
    if name not in list_repositories(base_path):
        raise UnknownProject(name)

    path = _repository_path(base_path, name)
    if path is None:
        raise UnknownProject(name)

    LOG.debug('Opening %s', path)
    repo = Repository(path)
    try:
        yield repo
    finally:
        repo.close()
