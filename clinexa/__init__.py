"""Clinexa Base: patient record entity, builder and collaborator ports."""

__version__ = "0.1.0"
