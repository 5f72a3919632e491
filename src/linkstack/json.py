''' JSON handling for linkstack configuration files. The fastest available
    backend is used: msgspec if installed (the ``fast`` extra), then orjson,
    then the standard library. :func:`dumps` always returns bytes, whichever
    backend is in use, and :func:`loads` accepts bytes or str.
'''

import os

msgspec = None
orjson = None
json = None

try:
    import msgspec
except ImportError:
    pass

if msgspec is None:
    try:
        import orjson
    except ImportError:
        pass

if msgspec is None and orjson is None:
    import json


if msgspec is not None:
    backend = 'msgspec'
    _encoder = msgspec.json.Encoder()
    _decoder = msgspec.json.Decoder()
    dumps = _encoder.encode
    loads = _decoder.decode
elif orjson is not None:
    backend = 'orjson'
    dumps = orjson.dumps
    loads = orjson.loads
else:
    backend = 'json'

    def dumps(thing):
        return json.dumps(thing).encode()

    loads = json.loads


def load(filename):
    """ Read and decode the JSON file *filename*.
    """

    with open(filename, 'rb') as reader:
        return loads(reader.read())


def dump(thing, filename):
    """ Encode *thing* as JSON and write it to *filename*, replacing the
        file atomically so that a concurrent reader never sees a partial
        write.
    """

    partial = filename + '.partial'

    with open(partial, 'wb') as writer:
        writer.write(dumps(thing))

    os.replace(partial, filename)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
