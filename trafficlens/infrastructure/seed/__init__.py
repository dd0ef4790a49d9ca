"""Synthetic traffic for demos."""
from trafficlens.infrastructure.seed.demo_data import SeedResult, seed_demo_data

__all__ = ["SeedResult", "seed_demo_data"]
