"""
Core numeric primitives, configuration models, and contracts.

This module contains the foundational building blocks (Rational and its
fixed-width integer arithmetic) that the ordering package is built on.
"""
