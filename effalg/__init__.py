"""Finite effect algebras: MV-blocks, lattice effect algebras pasted from blocks, table-given algebras and their filters."""

__version__ = "0.1.0"