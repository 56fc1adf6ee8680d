"""Trainer booking availability engine."""
