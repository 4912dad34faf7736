"""Exact integer math (ticks, prices, liquidity, swap steps, tick-array bitmap)
and in-memory state models (config, operation account, oracle, personal
position) for a concentrated-liquidity market maker."""

__version__ = "0.1.0"