"""Building blocks for an encrypted remote file server.

The package covers compression, cryptography, messages, socket framing, file
operations, logging, a file cache and a directory tree.
"""

__version__ = "0.1.0"