"""Describe command-line tools as schema-described agent modules, with audit logging and configuration."""

__version__ = "0.2.0"