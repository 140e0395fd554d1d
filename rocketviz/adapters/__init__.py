"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations of ``SourcePort`` (HTTP and local file)
    used by the load use case.

Dependencies:
    ``source_http`` depends on ``requests``; ``source_file`` on the filesystem.
"""
