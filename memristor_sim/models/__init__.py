"""Memristor device models, one module per model family.

Each module registers its variants with `memristor_sim.model_registry` at
import time; `memristor_sim/__init__.py` imports them all.
"""
