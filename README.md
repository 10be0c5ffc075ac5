# rivetdb

Building blocks for a query service that caches remote tables as Parquet
files:

- **Storage backends** (`rivetdb.storage`). They work out where a table's
  cached data and its sync state live, per connection, schema and table. They
  also read, write, delete and check those locations.
- **HTTP API types** (`rivetdb.http.errors`, `rivetdb.http.models`). These are
  the request and response bodies of the query, table and connection
  endpoints. `ApiError` carries an HTTP status and renders the error body.
- **Column encoding** (`rivetdb.http.serialization`). It turns typed column
  values into JSON-ready Python values, one row at a time.

The package has no runtime dependencies.

## Installation

```
pip install .
```

To run the test suite, install the test extra and then run pytest:

```
pip install ".[test]"
pytest
```

## Storage

`rivetdb.storage.base.StorageManager` is the abstract interface. It has two
implementations.

### FilesystemStorage

`FilesystemStorage` keeps everything under two local base directories and
hands out `file://` URLs:

```python
from rivetdb.storage.filesystem import FilesystemStorage

storage = FilesystemStorage("/var/cache/rivet", "/var/lib/rivet")
storage.cache_url(1, "public", "users")
# 'file:///var/cache/rivet/1/public/users'
storage.state_url(1, "public", "users")
# 'file:///var/lib/rivet/1/public/users.json'
storage.cache_prefix(1)
# '/var/cache/rivet/1'

path = storage.prepare_cache_write(1, "public", "users")
# /var/cache/rivet/1/public/users/users.parquet
# ... write Parquet data to `path` ...
url = storage.finalize_cache_write(path, 1, "public", "users")
# 'file:///var/cache/rivet/1/public/users'
```

How the methods behave:

- `read`, `write`, `delete` and `exists` take `file://` URLs. Any other URL
  raises `ValueError`.
- `write` creates missing parent directories.
- `delete` removes a file or a whole directory, and ignores paths that do not
  exist.
- `delete_prefix` takes a plain path, as returned by `cache_prefix` or
  `state_prefix`. It removes that directory tree.

### S3Storage

`S3Storage` keeps everything in one bucket, under `cache/` and `state/`, and
hands out `s3://` URLs. It works against any `ObjectStore`:
`get`, `put`, `delete`, `head` and `list`. A missing object raises
`ObjectNotFoundError`. The package includes `MemoryObjectStore`, which keeps
objects in memory.

```python
from rivetdb.storage.s3 import MemoryObjectStore, S3Storage

storage = S3Storage("my-bucket", MemoryObjectStore())
storage.cache_url(1, "public", "users")
# 's3://my-bucket/cache/1/public/users'
storage.write("s3://my-bucket/state/1/public/users.json", b"{}")
storage.exists("s3://my-bucket/state/1/public/users.json")   # True
storage.delete_prefix(storage.state_prefix(1))
```

Cache writes work in two steps:

1. `prepare_cache_write` returns a uniquely named temporary file.
2. `finalize_cache_write` uploads that file to
   `<cache_url>/<table>.parquet`, deletes the local file, and returns the
   directory URL.

`S3Storage.with_credentials` also records the credentials, so that
`get_s3_credentials()` returns them as an `S3Credentials`:

```python
storage = S3Storage.with_credentials(
    "my-bucket",
    MemoryObjectStore(),
    "http://localhost:9000",
    access_key="placeholder",
    secret_key="secret",
)
storage.get_s3_credentials().endpoint_url   # 'http://localhost:9000'
```

`FilesystemStorage`, and an `S3Storage` built without credentials, return
`None` from `get_s3_credentials()`.

## Errors

`ApiError` is an exception with a `status`, a `message` and a `code`. It has
these constructors:

- `bad_request` (400)
- `not_found` (404)
- `conflict` (409)
- `internal_error` (500)
- `bad_gateway` (502)

`from_exception` does two things:

- It returns an `ApiError` unchanged.
- It wraps any other exception as an internal error.

```python
from rivetdb.http.errors import ApiError

err = ApiError.not_found("Connection 'sales' not found")
err.to_response()
# (404, {'error': {'message': "Connection 'sales' not found", 'code': 'NOT_FOUND'}})
```

## Models

`rivetdb.http.models` has two kinds of class.

Request bodies:

- `QueryRequest`
- `CreateConnectionRequest`

Build these with `from_dict`. It raises `ValueError` when the input is not a
mapping, or when a required field is missing or has the wrong type.

Response bodies:

- `QueryResponse`
- `TableInfo`
- `TablesResponse`
- `CreateConnectionResponse`
- `ConnectionInfo`
- `ListConnectionsResponse`
- `GetConnectionResponse`

Each one turns into a plain dictionary with `to_dict`.

## Encoding columns

A `Field` describes a column: its name, its `DataType`, and whether it is
nullable. Two types need more information, and `Field` raises `ValueError`
without it:

- Timestamps need a `TimeUnit`, and may take a timezone. The timezone can be
  an IANA name or an offset such as `+05:30`.
- Decimals need a precision and a scale.

```python
from rivetdb.http.serialization import (
    DataType, Field, TimeUnit, encode_value_at, make_array_encoder,
)

encoder = make_array_encoder([42, None, -100], Field("x", DataType.INT64, nullable=True))
[encode_value_at(encoder, i) for i in range(3)]
# [42, None, -100]

ts = make_array_encoder([946729845], Field("t", DataType.TIMESTAMP, time_unit=TimeUnit.SECOND))
encode_value_at(ts, 0)
# '2000-01-01T12:30:45'

dec = make_array_encoder([12345], Field("d", DataType.DECIMAL128, precision=10, scale=2))
encode_value_at(dec, 0)
# 123.45
```

How each type is encoded:

| Type | JSON value |
| --- | --- |
| Integers | ints |
| Floats | floats; non-finite floats become `None` |
| Booleans | bools |
| Strings | strings |
| Binary | hex strings |
| `DATE32` | day counts, as ISO dates |
| `DATE64` and timestamps | ISO date-times, with an offset when the field has a timezone |
| Decimals with a positive scale | floats |
| `None`, and every value of a `NULL` column | `None` |

## What this package does not do

It provides the storage, error, model and encoding layers only. It does not
include any of these:

- a query engine
- an HTTP server or routing
- connectors that fetch tables from remote databases
- a Parquet writer
- a network S3 client

For that last one, plug your own `ObjectStore` implementation into
`S3Storage`.