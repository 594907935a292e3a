"""Ingestion layer.

This package is the boundary where heterogeneous domain records are turned
into canonical geometry. Nothing past this boundary branches on the shape of
an incoming record.
"""

__all__: list[str] = []
