"""Filesystem and object-store backends for cached table data and sync state."""