"""Normalization of third-party operational flight plans."""

from .normalizer import extract_ofp, synthesize_route

__all__ = ['extract_ofp', 'synthesize_route']
