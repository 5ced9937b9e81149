# ipfslog

The building blocks of an append-only log of signed, content-addressed
entries ordered by Lamport clocks, so that logs from many writers can be
merged without conflict.

## What is in the package

- `ipfslog.clock`: `LamportClock`, which has `tick`, `merge` and `compare`,
  and `copy_lamport_clock`.
- `ipfslog.entry`: the `Entry` dataclass and its `copy`, `is_valid`,
  `verify`, `equals`, `is_parent` and `set_additional_data_value` methods.
  The module also has `create_entry`, which signs and stores an entry,
  `to_multihash`, `normalize`, `to_hashable`, `from_multihash` and
  `find_children`.
- `ipfslog.ordered_entries`: `OrderedEntries`, an insertion-ordered and
  thread-safe map of entries keyed by hash string. Alongside it are
  `difference` and `find_heads`; `find_heads` returns the entries that no
  other entry points to, ordered by clock id.
- `ipfslog.sorting`: the comparators `sort_by_clocks`, `sort_by_clock_id`,
  `first`, `last_write_wins`, `first_write_wins`, `sort_by_entry_hash`,
  `compare` and `no_zeroes`. `sort_entries` is a stable in-place sort. When a
  comparison in it raises `LogError`, the error is logged and the comparison
  counts as "not less".
- `ipfslog.identity`: `Identity`, `IdentitySignature`,
  `CreateIdentityOptions` and the abstract `IdentityProvider`.
- `ipfslog.orbitdb_provider`: `OrbitDBIdentityProvider`, the `orbitdb`
  provider. Its identity id is the hex of a keystore public key.
- `ipfslog.identities`: `Identities`, along with `create_identity`,
  `is_supported`, `add_identity_provider`, `remove_identity_provider` and
  `compressed_to_uncompressed`, which handles secp256k1 keys.
- `ipfslog.secretbox`: `SecretBox` and `new_secretbox`, a NaCl secret box.
- `ipfslog.fetcher`: `Fetcher`, `fetch_all` and `fetch_parallel`. These walk
  a log from a set of hashes, on worker threads, following `next` and `refs`
  links.
- `ipfslog.process_queue`: `ProcessQueue`, a min-priority queue used by the
  fetcher.
- `ipfslog.access`: the abstract `AccessController` and
  `DefaultAccessController`, which lets anyone append.
- `ipfslog.types`: option records (`FetchOptions`, `CreateEntryOptions`,
  `WriteOptions`, `LogOptions`, `AppendOptions`, `IteratorOptions`,
  `JSONLog`, `Snapshot`, `Hashable`) and the abstract I/O interfaces
  `EntryIO` and `PreSigningIO`.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## Example: Lamport clocks

```python
from ipfslog.clock import LamportClock

a = LamportClock(b"writer-a", 0)
b = LamportClock(b"writer-b", 3)

a.tick()      # a.time == 1
a.merge(b)    # a.time == 3
a.compare(b)  # -1: equal times, so the ids decide
```

## Example: encrypting with a shared key

```python
from ipfslog.secretbox import new_secretbox

box = new_secretbox(bytes(range(32)))
sealed = box.seal(b"hello")  # random nonce, prefixed to the ciphertext
assert box.open(sealed) == b"hello"

nonce = box.derive_nonce(b"some input")  # first 24 bytes of SHA3-256
assert box.open_with_nonce(box.seal_with_nonce(b"hi", nonce), nonce) == b"hi"
```

A key that is not 32 bytes long raises `InvalidKeyError`, and a nonce that is
not 24 bytes long raises `InvalidNonceError`. A wrong key, a wrong nonce or a
truncated payload raises `DecryptionError`.

## Identities and keystores

`create_identity(CreateIdentityOptions(type="orbitdb", id=..., keystore=...))`
expects a keystore object that provides:

- `get_key(key_id)`: raises, or returns None, when the key is missing;
- `create_key(key_id)`: returns a `cryptography` private key;
- `sign(private_key, data)`;
- `verify(signature, public_key, data)`: raises when the signature does not
  match.

Public keys of secp256k1 identities are stored in uncompressed form.

## Errors

Failures in the log raise `ipfslog.errors.LogError`. Each one carries an
`ipfslog.errors.ErrorCode`, for example "entry is not defined" or "ipfs
instance not defined", and `ErrorCode.wrap` chains the error that caused it.
The secret box raises its own `ValueError` subclasses, listed above.

## What this package does not do

- It has no content store. `create_entry`, `to_multihash`, `from_multihash`
  and `Fetcher` all need an `EntryIO` implementation from the caller, and
  they raise `TypeError` when none is given. No CBOR or protobuf encoding
  ships with the package.
- It has no keystore. The caller supplies one, as described above.
- It has no log object. There is no append, join, iterator or snapshot
  operation over a whole log, only the pieces such a log is built from. The
  option records in `ipfslog.types` describe those operations but nothing
  here performs them.
- It has no command-line program.

## Running the tests

```
pytest
```