"""Bayesian network structure learning by genetic and local search over variable orderings."""

__version__ = "0.1.0"