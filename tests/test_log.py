import pytest
import structlog

import linkstack


@pytest.fixture
def restore_logging():
    yield
    structlog.reset_defaults()


def test_setup_console(restore_logging, capsys):

    linkstack.log.setup_logging(log_level='debug')

    logger = structlog.get_logger('linkstack.test')
    logger.debug('advancing', slot=10)

    captured = capsys.readouterr()
    assert 'advancing' in captured.out
    assert 'slot' in captured.out


def test_setup_json_filters_level(restore_logging, capsys):

    linkstack.log.setup_logging(json_output=True, log_level='WARNING')

    logger = structlog.get_logger('linkstack.test')
    logger.info('quiet')
    logger.warning('loud', slot=3)

    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 1

    record = linkstack.json.loads(lines[0])
    assert record['event'] == 'loud'
    assert record['slot'] == 3
    assert record['level'] == 'warning'


def test_level_from_environment(restore_logging, monkeypatch):

    monkeypatch.setenv('LINKSTACK_LOG_LEVEL', 'nonsense')

    with pytest.raises(ValueError):
        linkstack.log.setup_logging()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
