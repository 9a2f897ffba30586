import logging

import pytest

from lbcatalog.config.validator import ValidationError, validate_config


@pytest.mark.unit
def test_valid_config_passes(valid_config):
    validate_config(valid_config)


@pytest.mark.unit
def test_null_installdir_is_allowed(valid_config):
    valid_config['launchbox']['installdir'] = None

    validate_config(valid_config)


@pytest.mark.unit
def test_missing_installdir_only_warns(valid_config, tmp_path, caplog):
    valid_config['launchbox']['installdir'] = str(tmp_path / 'missing')

    validate_config(valid_config)

    assert any(
        'does not exist' in r.getMessage()
        for r in caplog.records if r.levelno == logging.WARNING
    )


@pytest.mark.unit
@pytest.mark.parametrize("section,key,value,message", [
    ('launchbox', 'installdir', '', 'launchbox.installdir'),
    ('launchbox', 'installdir', 42, 'launchbox.installdir'),
    ('launchbox', 'command_fallback', 'guess', 'launchbox.command_fallback'),
    ('logging', 'level', 'VERBOSE', 'logging.level'),
    ('logging', 'console', 'yes', 'logging.console'),
    ('logging', 'file', ['a.log'], 'logging.file'),
])
def test_invalid_values(valid_config, section, key, value, message):
    valid_config[section][key] = value

    with pytest.raises(ValidationError, match=message):
        validate_config(valid_config)


@pytest.mark.unit
def test_section_must_be_mapping(valid_config):
    valid_config['logging'] = 'verbose'

    with pytest.raises(ValidationError, match="logging must be a mapping"):
        validate_config(valid_config)


@pytest.mark.unit
def test_all_errors_are_reported(valid_config):
    valid_config['launchbox']['command_fallback'] = 'guess'
    valid_config['logging']['level'] = 'LOUD'

    with pytest.raises(ValidationError) as exc_info:
        validate_config(valid_config)

    assert 'command_fallback' in str(exc_info.value)
    assert 'logging.level' in str(exc_info.value)
