''' Select the fastest available library for encoding and decoding JSON
    frames. The :func:`dumps` exposed here always returns bytes, regardless
    of which library ends up doing the work, since every caller hands the
    result straight to a socket.
'''

msgspec = None
orjson = None
stdlib = None

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
    import json as stdlib


backend = None


def _stdlib_dumps(value):
    return stdlib.dumps(value, separators=(',', ':')).encode()


if msgspec is not None:
    backend = 'msgspec'
    _encoder = msgspec.json.Encoder()
    _decoder = msgspec.json.Decoder()
    dumps = _encoder.encode
    loads = _decoder.decode
    error = msgspec.DecodeError
elif orjson is not None:
    backend = 'orjson'
    dumps = orjson.dumps
    loads = orjson.loads
    error = orjson.JSONDecodeError
else:
    backend = 'json'
    dumps = _stdlib_dumps
    loads = stdlib.loads
    error = stdlib.JSONDecodeError


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
