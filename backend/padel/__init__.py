"""Padel championship management backend."""
