# snihash

A small library with no dependencies, in two parts:

- **TLS server-name sniffing** (`snihash.tls`): read the hostname from the
  Server Name Indication extension of a TLS ClientHello, the way a proxy does
  before deciding where to forward a connection.
- **Hashing** (`snihash.hashes`, `snihash.hashes_extra`, `snihash.table`,
  `snihash.ops`): classic 32-bit string hash functions and an insertion-ordered
  hash table with bucket chaining and automatic bucket doubling.

## Installation

```
pip install snihash
```

Python 3.10 or later is required.

## Reading the SNI hostname

```python
from snihash.tls import (
    parse_tls_header,
    IncompleteRequest,
    NoHostname,
    InvalidClientHello,
)

try:
    hostname = parse_tls_header(first_bytes_from_client)
except IncompleteRequest:
    ...  # fewer bytes than the record header or the record length; read more
except NoHostname:
    ...  # no server name: SSL 2.0, SSL 3.0 without extensions, or no SNI entry
except InvalidClientHello:
    ...  # not a TLS handshake, not a ClientHello, or malformed
```

`parse_tls_header` accepts `bytes`, `bytearray` or `memoryview` and returns the
first `host_name` entry as a `str` (decoded as Latin-1, cut at the first NUL
byte). All three exceptions derive from `TlsError`, itself a `ValueError`.

`parse_extensions` and `parse_server_name_extension` parse the extensions
block and the server name extension body on their own and raise the same
exceptions.

`Protocol` is a frozen dataclass pairing a `default_port` with a
`parse_packet` function; `TLS_PROTOCOL` is the instance for TLS, with port 443
and `parse_tls_header`.

Reasons for rejecting a record are logged at DEBUG level on the
`snihash.tls` logger.

## Hash functions

Each function takes `bytes`, `bytearray`, `memoryview` or `str` (encoded as
UTF-8) and returns an unsigned 32-bit integer; other types raise `TypeError`.

```python
from snihash.hashes import hash_jen, hash_ber, hash_sax, hash_fnv, hash_oat
from snihash.hashes_extra import hash_sfh, hash_mur

hash_fnv(b"example.com")
```

| Function   | Algorithm                                |
|------------|------------------------------------------|
| `hash_jen` | Bob Jenkins' lookup2 (table default)     |
| `hash_ber` | Bernstein, `h * 33 + byte`               |
| `hash_sax` | shift-add-xor                            |
| `hash_fnv` | FNV-1a                                   |
| `hash_oat` | Jenkins one-at-a-time                    |
| `hash_sfh` | Paul Hsieh's SuperFastHash               |
| `hash_mur` | MurmurHash3 x86 32-bit, fixed seed       |

## Hash table

```python
from snihash.hashes import hash_jen
from snihash.table import HashTable

table = HashTable(hash_jen)   # hash_jen is also the default
table.add(b"alpha", 1)
table.add(b"beta", 2)

table.find(b"alpha")      # 1; None when the key is absent
b"beta" in table          # True
len(table)                # 2
list(table)               # keys in insertion order
table.items()             # (key, value) pairs in insertion order

table.replace(b"alpha", 10)   # returns the old value (1), appends the new entry
table.delete(b"beta")         # returns 2; KeyError if the key is absent
table.clear()
```

Notes:

- `add` does not check for an existing key, so one key may hold several
  entries; `find` returns the most recently added one. Use `replace` to keep a
  key unique.
- `add_inorder(key, value, cmp)` inserts before the first entry that `cmp`
  ranks after the new one; `cmp` takes two `(key, value)` pairs and returns a
  negative, zero or positive number.
- `reorder(keys)` sets a new iteration order; `keys` must name every entry
  exactly once, otherwise `ValueError` is raised.
- `num_buckets()` reports the number of buckets (32 for a fresh non-empty
  table, 0 for an empty one). Buckets double when a chain reaches its
  threshold; after two ineffective doublings in a row, doubling stops.

## Sorting and selecting

```python
from snihash.ops import merge_sort, sort_table, select

merge_sort([3, 1, 2], lambda a, b: a - b)        # [1, 2, 3], stable
sort_table(table, lambda a, b: a[1] - b[1])      # sort entries by value, in place
subset = select(table, lambda key, value: value > 1)
```

`select` returns a new `HashTable` with the same hash function, leaving the
original unchanged.

## What this package does not do

It only parses bytes already in hand. It does not accept or open network
connections, forward traffic, or act as a proxy, and it provides no
command-line program.

## Running the tests

```
pip install -e ".[test]"
pytest
```