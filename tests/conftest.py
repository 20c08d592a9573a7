from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import git
import pytest

from rangelog.commit import CommitRecord
from rangelog.vcs import Ambiguous, NotFound, Unique

EPOCH = 1600000000


def make_record(oid, parents=(), message=None, minute=0):
    return CommitRecord(oid,
                        'A U Thor',
                        'author@example.com',
                        datetime(2021, 1, 1, tzinfo=timezone.utc) +
                        timedelta(minutes=minute),
                        message or 'Commit %s\n' % oid,
                        tuple(parents))


class FakeRepository:
    ''' In-memory stand-in for `rangelog.vcs.Repository` '''

    def __init__(self, records, refs=None, ambiguous=None):
        self.commits = {record.oid: record for record in records}
        self.refs = refs or {}
        self.ambiguous = ambiguous or {}
        self.resolved = []
        self.walks = []
        self.pulled = 0

    def resolve(self, text):
        self.resolved.append(text)
        if text in self.ambiguous:
            return Ambiguous(tuple(self.ambiguous[text]))
        oid = self.refs.get(text, text)
        if oid in self.commits:
            return Unique(oid)
        return NotFound(text)

    def record(self, oid):
        return self.commits[oid]

    def _ancestors(self, oid):
        result = set()
        stack = [oid]
        while stack:
            current = stack.pop()
            if current in result:
                continue
            result.add(current)
            stack.extend(self.commits[current].parents)
        return result

    def walk(self, start, stop_before=None):
        self.walks.append((start, stop_before))
        hidden = self._ancestors(stop_before) if stop_before else set()
        reachable = self._ancestors(start) - hidden
        children = dict.fromkeys(reachable, 0)
        for oid in reachable:
            for parent in self.commits[oid].parents:
                if parent in reachable:
                    children[parent] += 1
        ready = [start] if start in reachable else []
        while ready:
            oid = ready.pop(0)
            self.pulled += 1
            yield self.commits[oid]
            for parent in self.commits[oid].parents:
                if parent in reachable:
                    children[parent] -= 1
                    if children[parent] == 0:
                        ready.append(parent)


@pytest.fixture
def linear_fake():
    ''' c1 (root) -> c2 -> c3 -> c4 -> c5 '''
    records = [make_record('c1', minute=1)]
    for i in range(2, 6):
        records.append(make_record('c%d' % i, ['c%d' % (i - 1)], minute=i))
    return FakeRepository(records, refs={'HEAD': 'c5', 'master': 'c5'})


@pytest.fixture
def merge_fake():
    ''' c1 -> c2 -> m4, c1 -> s3 -> m4 '''
    records = [
        make_record('c1', minute=1),
        make_record('c2', ['c1'], minute=2),
        make_record('s3', ['c1'], minute=3),
        make_record('m4', ['c2', 's3'], minute=4),
    ]
    return FakeRepository(records, refs={'HEAD': 'm4'})


def _commit(repo, message, minute, parents=None, head=True):
    actor = git.Actor('A U Thor', 'author@example.com')
    date = '%d +0100' % (EPOCH + minute * 60)
    path = repo.working_tree_dir + '/file.txt'
    with open(path, 'a', encoding='utf-8') as handle:
        handle.write(message + '\n')
    repo.index.add(['file.txt'])
    return repo.index.commit(message,
                             parent_commits=parents,
                             head=head,
                             author=actor,
                             committer=actor,
                             author_date=date,
                             commit_date=date)


@pytest.fixture
def repos(tmp_path):
    ''' A base directory with a non-bare ``demo`` repository holding
        c1 (root) -> c2 -> c3 (HEAD), a side commit s4 forked from c1 and a
        merge m5 of c3 and s4 on the ``topic`` branch, plus a bare clone
        ``mirror.git`` and a nested bare ``group/nested.git``.
    '''
    base = tmp_path / 'repos'
    base.mkdir()
    (base / 'not-a-repo').mkdir()
    repo = git.Repo.init(base / 'demo')
    oids = {}
    oids['c1'] = _commit(repo, 'First commit', 1)
    oids['c2'] = _commit(repo, 'Second commit\n\nWith a body.', 2)
    oids['c3'] = _commit(repo, 'Third commit', 3)
    oids['s4'] = _commit(repo, 'Side commit', 4, parents=[oids['c1']],
                         head=False)
    oids['m5'] = _commit(repo,
                         'Merge side',
                         5,
                         parents=[oids['c3'], oids['s4']],
                         head=False)
    repo.create_head('topic', oids['m5'])
    repo.create_tag('v1', oids['c2'])
    repo.clone(str(base / 'mirror.git'), bare=True).close()
    repo.clone(str(base / 'group' / 'nested.git'), bare=True).close()
    repo.close()
    return SimpleNamespace(base=str(base),
                           oids={
                               name: commit.hexsha
                               for name, commit in oids.items()
                           })
