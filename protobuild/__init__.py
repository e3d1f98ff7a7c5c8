"""protobuild — incremental protoc build step."""

__version__ = "0.1.0"
