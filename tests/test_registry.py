import os

import pytest

import linkstack


def test_register():

    registry = linkstack.Registry()
    assert registry.register('Greet', 10) == 10
    registry.register('farewell', 11)

    assert registry['greet'] == 10
    assert registry['GREET'] == 10
    assert 'farewell' in registry
    assert 'unknown' not in registry
    assert registry.name(11) == 'farewell'
    assert len(registry) == 2
    assert sorted(registry) == ['farewell', 'greet']

    with pytest.raises(KeyError):
        registry['unknown']

    with pytest.raises(KeyError):
        registry.name(99)


def test_resolve():

    registry = linkstack.Registry({'greet': 10})
    assert registry.resolve('greet') == 10
    assert registry.resolve(42) == 42


def test_reserved_id():

    registry = linkstack.Registry()

    with pytest.raises(ValueError):
        registry.register('zero', 0)

    with pytest.raises(ValueError):
        registry.register('bogus', 'ten')

    with pytest.raises(ValueError):
        registry.register('', 5)


def test_duplicates():

    registry = linkstack.Registry({'greet': 10})

    with pytest.raises(ValueError):
        registry.register('other', 10)

    with pytest.raises(ValueError):
        registry.register('greet', 12)


def test_update_is_atomic():

    registry = linkstack.Registry({'greet': 10})

    with pytest.raises(ValueError):
        registry.update({'a': 1, 'b': 2, 'c': 10})

    assert registry.to_dict() == {'greet': 10}


def test_from_dict_rejects_conflicts():

    with pytest.raises(ValueError):
        linkstack.Registry.from_dict({'a': 1, 'A': 2})


def test_directory(home):
    assert linkstack.config.directory() == str(home)
    assert os.environ['LINKSTACK_HOME'] == str(home)


def test_directory_must_be_absolute(home):

    with pytest.raises(ValueError):
        linkstack.config.directory('relative/path')


def test_missing_registry_is_empty(home):

    registry = linkstack.config.load_registry('nothing')
    assert len(registry) == 0


def test_save_and_load(home):

    registry = linkstack.Registry({'greet': 10, 'farewell': 11})
    linkstack.config.save_registry('Deployment', registry)

    filename = linkstack.config.registry_filename('deployment')
    assert os.path.exists(filename)

    linkstack.config._clear()
    linkstack.config.directory(str(home))

    loaded = linkstack.config.load_registry('deployment')
    assert loaded is not registry
    assert loaded.to_dict() == {'greet': 10, 'farewell': 11}

    again = linkstack.config.load_registry('DEPLOYMENT')
    assert again is loaded


def test_load_conflicting_file(home):

    filename = linkstack.config.registry_filename('broken')
    os.makedirs(os.path.dirname(filename))

    with open(filename, 'w') as writer:
        writer.write('{"a": 1, "b": 1}')

    with pytest.raises(ValueError):
        linkstack.config.load_registry('broken')


def test_transport_backend(monkeypatch):

    monkeypatch.delenv('LINKSTACK_TRANSPORT', raising=False)
    assert linkstack.config.transport_backend() == 'local'

    monkeypatch.setenv('LINKSTACK_TRANSPORT', 'ZMQ')
    assert linkstack.config.transport_backend() == 'zmq'

    monkeypatch.setenv('LINKSTACK_TRANSPORT', 'carrier-pigeon')
    with pytest.raises(ValueError):
        linkstack.config.transport_backend()


def test_peers(monkeypatch):

    monkeypatch.setenv('LINKSTACK_PEERS', 'tcp://a:1, tcp://b:2,,')
    assert linkstack.config.peers() == ['tcp://a:1', 'tcp://b:2']

    monkeypatch.delenv('LINKSTACK_PEERS')
    assert linkstack.config.peers() == []


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
