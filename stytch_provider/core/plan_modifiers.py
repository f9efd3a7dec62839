"""Attribute plan modifiers.

Each modifier takes a ``PlanRequest`` and returns a ``PlanResult``. They run
in declaration order, each seeing the previous one's plan value.
"""
from __future__ import annotations

from .schema import PlanRequest, PlanResult, UNKNOWN


def use_state_for_unknown(req: PlanRequest) -> PlanResult:
    """Keep the prior state value instead of showing the attribute as unknown.
    
    Used for computed values that never change after creation (IDs,
    timestamps of creation).
    """
    if req.plan_value is UNKNOWN and req.state_exists and req.state_value is not None:
        return PlanResult(req.state_value)
    return PlanResult(req.plan_value)


def requires_replace(req: PlanRequest) -> PlanResult:
    """Force replacement when the value changes on an existing resource."""
    if not req.state_exists or req.plan_value is UNKNOWN:
        return PlanResult(req.plan_value)
    return PlanResult(req.plan_value, requires_replace=req.plan_value != req.state_value)


def preserve_sensitive_value(req: PlanRequest) -> PlanResult:
    """Preserve sensitive values the API never echoes back.
    
    An unknown plan value takes the state value. A null plan value takes the
    state value when the state has one. Anything else is an explicit
    operator value and wins.
    """
    if req.plan_value is UNKNOWN:
        return PlanResult(req.state_value)
    if req.plan_value is None and req.state_value is not None:
        return PlanResult(req.state_value)
    return PlanResult(req.plan_value)
