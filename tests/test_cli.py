"""Tests for the lexgen CLI."""

import json

import pytest
from click.testing import CliRunner

from lexgen import __version__
from lexgen.cli import cli
from lexgen.emitter import BANNER


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


class TestCLIMain:
    """Test main CLI command."""

    def test_cli_version(self, runner):
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_cli_help(self, runner):
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'gen-module' in result.output
        assert 'ids' in result.output


class TestGenModule:
    """Test the gen-module command."""

    def test_generates_files(self, runner, tmp_path, lexicon_dir):
        outdir = tmp_path / 'out'
        result = runner.invoke(cli, ['gen-module', str(outdir), str(lexicon_dir)])
        assert result.exit_code == 0, result.output
        assert 'Generated 2 files from 3 lexicons' in result.output

        lexicons = (outdir / 'lexicons.py').read_text(encoding='utf-8')
        util = (outdir / 'util.py').read_text(encoding='utf-8')
        assert lexicons.startswith(BANNER)
        assert '"ComExampleDefs": "com.example.defs"' in lexicons
        assert util.startswith(BANNER)
        assert 'def has_prop(' in util

    def test_config_file(self, runner, tmp_path, lexicon_dir):
        config = tmp_path / 'lexgen.yaml'
        config.write_text('lexicons_path: /schemas.py\nregistry_module: myapp.lexicon\n')
        outdir = tmp_path / 'out'
        result = runner.invoke(
            cli, ['gen-module', '--config', str(config), str(outdir), str(lexicon_dir)]
        )
        assert result.exit_code == 0, result.output
        content = (outdir / 'schemas.py').read_text(encoding='utf-8')
        assert 'from myapp.lexicon import Lexicons' in content

    def test_registry_module_option(self, runner, tmp_path, lexicon_dir):
        outdir = tmp_path / 'out'
        result = runner.invoke(
            cli,
            ['gen-module', '--registry-module', 'myapp.lexicon', str(outdir), str(lexicon_dir)],
        )
        assert result.exit_code == 0, result.output
        assert 'from myapp.lexicon import Lexicons' in (outdir / 'lexicons.py').read_text()

    def test_collision_fails(self, runner, tmp_path):
        src = tmp_path / 'src'
        src.mkdir()
        (src / 'a.json').write_text(json.dumps({'id': 'a.b'}))
        (src / 'b.json').write_text(json.dumps({'id': 'a.B'}))
        outdir = tmp_path / 'out'
        result = runner.invoke(cli, ['gen-module', str(outdir), str(src)])
        assert result.exit_code == 1
        assert 'Error' in result.output
        assert not outdir.exists()

    def test_requires_lexicons(self, runner, tmp_path):
        result = runner.invoke(cli, ['gen-module', str(tmp_path / 'out')])
        assert result.exit_code != 0


class TestIds:
    """Test the ids command."""

    def test_lists_symbols(self, runner, lexicon_dir):
        result = runner.invoke(cli, ['ids', str(lexicon_dir)])
        assert result.exit_code == 0, result.output
        assert 'com.example.getThing' in result.output
        assert 'ComExampleGetThing' in result.output

    def test_invalid_document(self, runner, tmp_path):
        bad = tmp_path / 'bad.json'
        bad.write_text('{"lexicon": 1}')
        result = runner.invoke(cli, ['ids', str(bad)])
        assert result.exit_code == 1
        assert 'Error' in result.output
