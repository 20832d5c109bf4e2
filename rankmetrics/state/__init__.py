"""Mutable ranking state for the interactive editor."""

from rankmetrics.state.controller import ControllerConfig, RankingController

__all__ = ["ControllerConfig", "RankingController"]
