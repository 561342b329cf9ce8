"""Procspine core -- framework primitives shared by every record type."""
