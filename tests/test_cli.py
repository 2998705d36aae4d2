"""Tests for the command line interface."""

import io
import json

import pytest

import config_logging
from spellcheck import config
from spellcheck.__main__ import main, EXIT_CLEAN, EXIT_MISSPELLED, EXIT_DICTIONARY, EXIT_CONFIG


@pytest.fixture
def text_file(tmp_path):
    path = tmp_path / 'doc.txt'
    path.write_text("Ths is a tst", encoding='utf-8')
    return path


class TestCheckCommand:
    """Tests for `spellcheck check`."""

    def test_reports_misspellings(self, main_dict, text_file, capsys):
        code = main(['--dict', str(main_dict), 'check', str(text_file)])
        assert code == EXIT_MISSPELLED
        out = capsys.readouterr().out.splitlines()
        assert out[0].startswith("0-3: Ths -> ")
        assert "this" in out[0]
        assert out[1].startswith("9-12: tst -> test")

    def test_json_output(self, main_dict, text_file, capsys):
        main(['--dict', str(main_dict), 'check', str(text_file), '--json', '--no-suggest'])
        data = json.loads(capsys.readouterr().out)
        assert data['count'] == 2
        assert data['misspelled'][1] == {'word': 'tst', 'start': 9, 'end': 12}

    def test_clean_text(self, main_dict, tmp_path):
        path = tmp_path / 'ok.txt'
        path.write_text("this is a test", encoding='utf-8')
        assert main(['--dict', str(main_dict), 'check', str(path)]) == EXIT_CLEAN

    def test_stdin(self, main_dict, monkeypatch, capsys):
        monkeypatch.setattr('sys.stdin', io.StringIO("hello wrold"))
        code = main(['--dict', str(main_dict), 'check', '-', '--ignore', 'wrold'])
        assert code == EXIT_CLEAN

    def test_learn_saves_user_dictionary(self, main_dict, text_file, tmp_path):
        user = tmp_path / 'user.txt'
        code = main(['--dict', str(main_dict), '--user-dict', str(user),
                     'check', str(text_file), '--learn', 'Ths', '--learn', 'tst'])
        assert code == EXIT_CLEAN
        assert user.read_text(encoding='utf-8') == "Ths\ntst\n"

    def test_missing_dictionary(self, tmp_path, text_file, capsys):
        code = main(['--dict', str(tmp_path / 'nope.txt'), 'check', str(text_file)])
        assert code == EXIT_DICTIONARY
        assert "Main dictionary could not be loaded" in capsys.readouterr().err

    def test_dictionary_from_environment(self, main_dict, text_file, monkeypatch):
        monkeypatch.setattr(config, '_config', None)
        monkeypatch.setenv('SPELLCHECK_MAIN_DICTIONARY', str(main_dict))
        assert main(['check', str(text_file), '--no-suggest']) == EXIT_MISSPELLED

    def test_overrides_leave_shared_config_alone(self, main_dict, text_file, monkeypatch):
        monkeypatch.setattr(config, '_config', config.SpellcheckConfig())
        main(['--dict', str(main_dict), 'check', str(text_file), '--no-suggest'])
        assert config.get_config().main_dictionary is None


class TestServeCommand:
    """Tests for `spellcheck serve`."""

    @pytest.fixture(autouse=True)
    def fresh_app_config(self):
        config_logging.reset_config()
        yield
        config_logging.reset_config()

    def test_invalid_host_config_refuses_to_start(self, main_dict, monkeypatch, capsys):
        monkeypatch.setenv('SPELL_PORT', '0')
        code = main(['--dict', str(main_dict), 'serve'])
        assert code == EXIT_CONFIG
        assert "Port out of range: 0" in capsys.readouterr().err
