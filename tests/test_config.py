from rangelog.config import MAX_COMMITS, config_path, load_config


def test_defaults(tmp_path):
    conf = load_config(str(tmp_path / 'missing'))
    assert conf['log'].getint('max_count') == MAX_COMMITS == 250
    assert conf['log']['format'] == 'text'
    assert conf['date']['format'] == 'rfc'
    assert conf['repositories']['base_path'] == ''


def test_overrides(tmp_path):
    path = tmp_path / 'config'
    path.write_text('[log]\nmax_count = 10\n[repositories]\nbase_path = /srv\n',
                    encoding='utf-8')
    conf = load_config(str(path))
    assert conf['log'].getint('max_count') == 10
    assert conf['log']['format'] == 'text'
    assert conf['repositories']['base_path'] == '/srv'


def test_broken_file_keeps_defaults(tmp_path):
    path = tmp_path / 'config'
    path.write_text('max_count = 10\n', encoding='utf-8')
    conf = load_config(str(path))
    assert conf['log'].getint('max_count') == MAX_COMMITS


def test_config_path(monkeypatch, tmp_path):
    monkeypatch.setenv('XDG_CONFIG_HOME', str(tmp_path))
    assert config_path() == str(tmp_path / 'rangelog' / 'config')
