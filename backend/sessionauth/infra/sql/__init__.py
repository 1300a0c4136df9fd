"""Relational credential verifier."""
