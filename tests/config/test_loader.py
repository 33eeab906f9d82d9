import json
from pathlib import Path

import pytest

from assoc import AssociativeContainer
from assoc.config.loader import bind_config_file, load_config_file
from assoc.config.validation import get_config


def test_load_json_and_toml(tmp_path: Path):
    json_file = tmp_path / 'settings.json'
    json_file.write_text(json.dumps({'glue': ';', 'AssociativeContainer': {'autovivify': True}}))
    assert load_config_file(json_file) == {'glue': ';', 'AssociativeContainer': {'autovivify': True}}

    toml_file = tmp_path / 'settings.toml'
    toml_file.write_text('separator = "|"\n\n[AssociativeContainer]\nglue = "-"\n')
    assert load_config_file(str(toml_file)) == {'separator': '|', 'AssociativeContainer': {'glue': '-'}}


def test_load_yaml(tmp_path: Path):
    pytest.importorskip('yaml')
    yaml_file = tmp_path / 'settings.yml'
    yaml_file.write_text('glue: ":"\nautovivify: true\n')
    assert load_config_file(yaml_file) == {'glue': ':', 'autovivify': True}


def test_load_errors(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_config_file(tmp_path / 'missing.json')

    ini_file = tmp_path / 'settings.ini'
    ini_file.write_text('[a]\nb = 1\n')
    with pytest.raises(RuntimeError):
        load_config_file(ini_file)

    list_file = tmp_path / 'settings.json'
    list_file.write_text('[1, 2]')
    with pytest.raises(RuntimeError):
        load_config_file(list_file)


def test_bind_config_file_configures_containers(tmp_path: Path):
    toml_file = tmp_path / 'assoc.toml'
    toml_file.write_text('[AssociativeContainer]\nglue = " + "\nseparator = ";"\nautovivify = true\n')

    bind_config_file(toml_file)
    assert 'AssociativeContainer' in get_config()

    c = AssociativeContainer.explode('1;2;3')
    assert c.to_array() == {0: '1', 1: '2', 2: '3'}
    assert c.implode() == '1 + 2 + 3'
    assert c['missing'].is_empty()
    assert c.exists('missing')
