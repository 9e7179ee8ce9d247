"""Small numeric helpers shared by the engine."""

from .numbers import round_half_up, round_to, is_finite_number, clamp

__all__ = ['round_half_up', 'round_to', 'is_finite_number', 'clamp']
