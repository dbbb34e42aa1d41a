"""Domain services for the reading plan engine."""

from . import completion_evaluator, goal_resolver, progress_accumulator, reward_calculator
from .plan_orchestrator import PlanOrchestrator

__all__ = [
    "PlanOrchestrator",
    "completion_evaluator",
    "goal_resolver",
    "progress_accumulator",
    "reward_calculator",
]
