"""Readers for BDMV binary structures."""
