"""Peer-to-peer wire payloads."""

from procspine.remote.data import RemoteData

__all__ = ["RemoteData"]
