"""Streaming transformation pipe.

This module runs a background producer that reads and transforms lines
and hands them to a lazily reading consumer through a bounded channel.
"""
