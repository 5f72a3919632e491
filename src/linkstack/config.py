""" Configuration handling. linkstack has very little to configure: the
    location of the configuration directory, the state-id registries kept
    there, and the choice of transport backend. Everything here is read from
    environment variables or from JSON files under :func:`directory`.
"""

import os
import threading

import structlog

from . import json
from .registry import Registry


logger = structlog.get_logger(__name__)

_cache = dict()
_cache_lock = threading.Lock()

backends = ('local', 'zmq')


def directory(default=None):
    """ Return the directory location where we should be loading and/or saving
        configuration files. This defaults to ``$HOME/.linkstack``, but can be
        overridden by calling this method with a valid path, or by setting
        the ``LINKSTACK_HOME`` environment variable. Note that changes to the
        environment variable will be ignored unless it is set prior to the
        first invocation of this method.
    """

    if default is not None:
        default = str(default)
        default = os.path.expandvars(default)

        if os.path.isabs(default):
            pass
        else:
            raise ValueError('the default directory must be an absolute path')

        if os.path.exists(default):
            pass
        else:
            os.makedirs(default, mode=0o775)

        os.environ['LINKSTACK_HOME'] = default
        directory.found = default


    found = directory.found

    if found is not None:
        return found

    try:
        found = os.environ['LINKSTACK_HOME']
    except KeyError:
        pass
    else:
        directory.found = found
        return found

    try:
        home = os.environ['HOME']
    except KeyError:
        raise RuntimeError('LINKSTACK_HOME and HOME environment variables not set, cannot determine linkstack configuration directory')

    found = os.path.join(home, '.linkstack')

    directory.found = found
    return found

directory.found = None



def registry_filename(name):
    """ Return the path to the JSON file holding the registry *name*.
    """

    name = name.lower()
    return os.path.join(directory(), 'registry', name + '.json')



def load_registry(name):
    """ Retrieve the :class:`linkstack.registry.Registry` called *name*. The
        registry is read from disk the first time it is requested and cached
        thereafter. A missing file results in an empty registry; a file with
        conflicting assignments raises a ValueError.
    """

    name = name.lower()

    try:
        registry = _cache[name]
    except KeyError:
        _cache_lock.acquire()

        try:
            registry = _cache[name]
        except KeyError:
            registry = _load_registry(name)
            _cache[name] = registry
        finally:
            _cache_lock.release()

    return registry



def _load_registry(name):

    filename = registry_filename(name)

    try:
        mapping = json.load(filename)
    except FileNotFoundError:
        logger.debug('registry file not found', registry=name, filename=filename)
        return Registry()

    if not isinstance(mapping, dict):
        raise ValueError('registry file must contain a JSON object: ' + filename)

    registry = Registry.from_dict(mapping)
    logger.debug('registry loaded', registry=name, states=len(registry))
    return registry



def save_registry(name, registry):
    """ Write *registry* to disk as the registry called *name*, replacing
        any cached instance.
    """

    name = name.lower()
    filename = registry_filename(name)
    registry_directory = os.path.dirname(filename)

    if os.path.exists(registry_directory):
        pass
    else:
        os.makedirs(registry_directory, mode=0o775)

    if os.access(registry_directory, os.W_OK) != True:
        raise OSError('cannot write to registry directory: ' + registry_directory)

    json.dump(registry.to_dict(), filename)

    with _cache_lock:
        _cache[name] = registry



def _clear():
    """ Forget any cached registries, and the cached directory location.
    """

    with _cache_lock:
        _cache.clear()

    directory.found = None



def transport_backend():
    """ Return the name of the default transport backend, as selected by the
        ``LINKSTACK_TRANSPORT`` environment variable.
    """

    backend = os.environ.get('LINKSTACK_TRANSPORT', 'local').lower()

    if backend not in backends:
        raise ValueError('unknown LINKSTACK_TRANSPORT backend: ' + repr(backend))

    return backend



def link_target():
    """ Return the default link target for outbound messages, as set by the
        ``LINKSTACK_LINK_TARGET`` environment variable. The default, ``*``,
        addresses every listener.
    """

    return os.environ.get('LINKSTACK_LINK_TARGET', '*')



def peers():
    """ Return the endpoints a ZeroMQ bus should receive from, as listed in
        the comma separated ``LINKSTACK_PEERS`` environment variable.
    """

    raw = os.environ.get('LINKSTACK_PEERS', '')
    return [peer.strip() for peer in raw.split(',') if peer.strip()]


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
