# fenris

Core components of an encrypted remote file server: the pieces a client and a
server share, plus a server-side file cache and an in-memory directory tree.

## Installation

```
pip install fenris
```

For running the test suite:

```
pip install "fenris[test]"
pytest
```

## What is inside

- `fenris.compression`: zlib `compress(data, level=6)` and
  `decompress(data, original_size)`. A level outside 0 to 9 raises
  `CompressionError` with `CompressionResult.INVALID_LEVEL`. Output larger
  than `original_size` gives `BUFFER_TOO_SMALL`. A corrupt or incomplete
  stream gives `INVALID_DATA`.
- `fenris.crypto`: AES-GCM `encrypt_data` and `decrypt_data`. The ciphertext
  carries a 16-byte tag at its end. Keys are 16, 24 or 32 bytes and IVs are
  12 bytes. The module also has `generate_random_iv`, P-256
  `generate_ecdh_keypair`, which returns a 32-byte private key and a 65-byte
  uncompressed public point, `compute_ecdh_shared_secret`, and HKDF-SHA256
  `derive_key_from_shared_secret(shared_secret, key_size, context=b"")`.
  Failures raise `EncryptionError` or `ECDHError`, and each carries a
  `result` attribute.
- `fenris.messages`: the `Request`, `Response`, `FileInfo` and
  `DirectoryListing` dataclasses, with the `RequestType` and `ResponseType`
  enums. They have a protobuf-compatible binary encoding:
  - `serialize_request` and `deserialize_request`
  - `serialize_response` and `deserialize_response`

  Deserialising malformed bytes returns a default message. The module also
  renders messages as indented JSON with `request_to_json` and
  `response_to_json`.
- `fenris.network`: length-prefixed framing over stream sockets.
  `send_prefixed_data` and `receive_prefixed_data` are built on
  `send_size`, `receive_size`, `send_data` and `receive_data`. The length
  prefix is a 32-bit big-endian integer. With `non_blocking_mode=True`, a
  would-block condition is retried after a short pause. Failures raise
  `NetworkError`. A peer that closes the connection gives
  `NetworkResult.DISCONNECTED`.
- `fenris.file_operations`: file and directory helpers, listed below. Each
  raises `FileOperationError`, which carries a `FileOperationResult`.
  - `read_file`, `write_file`, `append_file`, `create_file`, `delete_file`
  - `get_file_info`, `file_exists`, `get_file_size`, `copy_file`,
    `rename_path`
  - `create_directory`, `create_directories`, `delete_directory`,
    `list_directory`
  - `change_directory`, `get_current_directory`
- `fenris.log`: named loggers with console and rotating-file output.
  - `LogLevel` and `LoggingConfig`
  - `initialize_logging`, `get_logger`, `set_log_level`,
    `log_level_to_string`
  - `add_logging_arguments(parser)` adds the `--log-level`,
    `--no-console-log`, `--file-log` and `--log-file` options to an argparse
    parser.
  - `configure_logging(args)` sets up logging from the parsed options.
- `fenris.cache`: `CacheManager(max_cache_size, logger_name="fenris")`, a
  thread-safe least-recently-used cache of file contents.
  - It has `read_file`, `write_file`, `invalidate`, `clear_cache` and
    `len()`.
  - `read_file` returns empty bytes when the file cannot be read.
  - `write_file` returns `False` when the write fails.
- `fenris.fs_tree`: `FileSystemTree`, a thread-safe in-memory tree of `Node`
  objects rooted at `/`. It has `add_node`, `remove_node`, `find_node`,
  `find_file` and `find_directory`. A node whose `access_count` is above zero
  cannot be removed.

## Example: an encrypted exchange

```python
from fenris import crypto, messages

alice_private, alice_public = crypto.generate_ecdh_keypair()
bob_private, bob_public = crypto.generate_ecdh_keypair()

shared = crypto.compute_ecdh_shared_secret(alice_private, bob_public)
key = crypto.derive_key_from_shared_secret(shared, 32, b"")

request = messages.Request(command=messages.RequestType.READ_FILE,
                           filename="notes.txt")
iv = crypto.generate_random_iv()
ciphertext = crypto.encrypt_data(messages.serialize_request(request), key, iv)

# The peer derives the same key from its own private key.
peer_key = crypto.derive_key_from_shared_secret(
    crypto.compute_ecdh_shared_secret(bob_private, alice_public), 32, b""
)
plaintext = crypto.decrypt_data(ciphertext, peer_key, iv)
assert messages.deserialize_request(plaintext) == request
```

## Example: caching file reads

```python
from fenris.cache import CacheManager

cache = CacheManager(max_cache_size=100, logger_name="fenris")
cache.write_file("greeting.txt", "hello")
print(cache.read_file("greeting.txt"))  # b'hello', served from the cache
print(len(cache))                       # 1
```

## What this package does not do

This package is a library of components. It has no server and no client
program, and it installs no command. It does not accept connections, manage
sessions or dispatch requests to file operations. The key exchange, framing,
encryption and messages shown above are the parts such a program would
assemble. Connecting them over a socket is left to the code that uses this
package.