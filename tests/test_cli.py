import json

import pytest
from lxml import etree

from atlas_tms import cli

URL_A = 'https://atlas.example.com/styles/v1/atlas-user/alpha.json?access_token=pk.AAA'
URL_B = 'https://atlas.example.com/styles/v1/atlas-user/beta.json?access_token=pk.BBB'


def read_layers(path):
    root = etree.parse(str(path)).getroot()
    return [l.get('display-name') for l in root.findall('layers/layer')]


def test_flags(tmp_path):
    rc = cli.main(['--style', URL_A, '--name', 'A', '--style', URL_B, '--name', 'B',
                   '--repository', str(tmp_path), '--skip-check'])
    assert rc == 0
    assert read_layers(tmp_path / 'Mapsources' / 'Atlas.tms') == ['A', 'B']


def test_batch(tmp_path):
    batch = tmp_path / 'styles.json'
    batch.write_text(json.dumps({
        'repository': str(tmp_path),
        'filename': 'FromBatch',
        'styles': [{'url': URL_A, 'name': 'A'}],
    }))
    rc = cli.main(['--batch', str(batch), '--skip-check'])
    assert rc == 0
    assert read_layers(tmp_path / 'Mapsources' / 'FromBatch.tms') == ['A']


def test_prompt(tmp_path):
    answers = iter([URL_A, 'A', URL_B, 'B'])
    rc = cli.main(['-n', '2', '--repository', str(tmp_path), '--filename', 'Prompted',
                   '--skip-check'], prompt=lambda _: next(answers))
    assert rc == 0
    assert read_layers(tmp_path / 'Mapsources' / 'Prompted.tms') == ['A', 'B']


def test_reachability_runs_unless_skipped(tmp_path, monkeypatch):
    checked = []
    monkeypatch.setattr(cli, 'check_styles', lambda urls: checked.extend(urls))
    rc = cli.main(['--style', URL_A, '--name', 'A', '--repository', str(tmp_path)])
    assert rc == 0
    assert checked == [URL_A]


def test_malformed_url(tmp_path):
    rc = cli.main(['--style', 'https://bad/url', '--name', 'A',
                   '--repository', str(tmp_path), '--skip-check'])
    assert rc == 2
    assert not (tmp_path / 'Mapsources').exists()


def test_cardinality_checked_before_network(tmp_path, monkeypatch):
    def fail(urls):
        raise AssertionError('should not be called')
    monkeypatch.setattr(cli, 'check_styles', fail)
    rc = cli.main(['--style', URL_A, '--style', URL_B, '--name', 'A',
                   '--repository', str(tmp_path)])
    assert rc == 2


def test_default_repository(monkeypatch):
    monkeypatch.setenv('TABLEAU_REPOSITORY', '/srv/tableau')
    assert cli.default_repository() == '/srv/tableau'
    monkeypatch.delenv('TABLEAU_REPOSITORY')
    assert cli.default_repository().endswith('My Tableau Repository')


def test_prompt_asks_for_repository(tmp_path):
    answers = iter([str(tmp_path), URL_A, 'A'])
    asked = []

    def prompt(message):
        asked.append(message)
        return next(answers)

    rc = cli.main(['-n', '1', '--skip-check'], prompt=prompt)
    assert rc == 0
    assert asked[0].startswith('Where is the Tableau Repository on this machine?')
    assert read_layers(tmp_path / 'Mapsources' / 'Atlas.tms') == ['A']


def test_prompt_repository_default(monkeypatch):
    monkeypatch.setenv('TABLEAU_REPOSITORY', '/srv/tableau')
    assert cli.prompt_repository(lambda _: '  ') == '/srv/tableau'


def test_control_character_in_name(tmp_path):
    rc = cli.main(['--style', URL_A, '--name', 'A\x01',
                   '--repository', str(tmp_path), '--skip-check'])
    assert rc == 2
    assert not (tmp_path / 'Mapsources').exists()


def test_template_is_directory(tmp_path):
    rc = cli.main(['--style', URL_A, '--name', 'A', '--template', str(tmp_path),
                   '--repository', str(tmp_path), '--skip-check'])
    assert rc == 2


def test_batch_not_utf8(tmp_path):
    batch = tmp_path / 'styles.json'
    batch.write_bytes(b'\xff\xfe')
    rc = cli.main(['--batch', str(batch), '--repository', str(tmp_path), '--skip-check'])
    assert rc == 2


@pytest.mark.parametrize('source', [['--batch', 'styles.json'], ['-n', '1']])
def test_style_flags_rejected_with_other_source(source):
    with pytest.raises(SystemExit) as e:
        cli.main(source + ['--style', URL_A, '--name', 'A', '--skip-check'])
    assert e.value.code == 2
