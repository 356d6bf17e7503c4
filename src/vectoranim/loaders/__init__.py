"""Loader utilities for data-driven layer rigs."""

from .rig_loader import RigLoader, RigLoadResult

__all__ = ['RigLoader', 'RigLoadResult']
