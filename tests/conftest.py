import pytest

import linkstack


@pytest.fixture
def home(tmp_path, monkeypatch):
    """ Point the linkstack configuration directory at a scratch location,
        and forget anything cached from a previous test.
    """

    path = str(tmp_path / 'linkstack')

    monkeypatch.setenv('LINKSTACK_HOME', path)
    linkstack.config._clear()
    linkstack.config.directory(path)

    yield tmp_path / 'linkstack'

    linkstack.config._clear()


@pytest.fixture
def local():
    """ A fresh in-process transport, installed as the default for the
        duration of the test.
    """

    transport = linkstack.transport.LocalTransport()
    previous = linkstack.transport.set_default(transport)

    yield transport

    transport.close()
    linkstack.transport.set_default(previous)


class Recorder:
    """ Stand-in for a send primitive; remembers every call.
    """

    def __init__(self):
        self.sent = list()

    def __call__(self, target, slot, payload, token):
        self.sent.append((target, slot, payload, token))


@pytest.fixture
def recorder():
    return Recorder()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
