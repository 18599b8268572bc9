"""
tests.property package bootstrap.

Registers the Hypothesis profiles used by the property suites and picks one:
HYPOTHESIS_PROFILE if set, otherwise "ci" under CI (CI env var truthy) and
"dev" locally.

    from tests.property import given, st, identifiers

Environment knobs:
- HYPOTHESIS_PROFILE=dev|ci|fast
- CI=true
"""
from __future__ import annotations

import os
from typing import Final, Tuple

from hypothesis import HealthCheck, Verbosity, given, settings
from hypothesis import strategies as st

from cpm.manifest import Method, Parameter, ParamType


def _hc(*items: HealthCheck) -> Tuple[HealthCheck, ...]:
    return items


settings.register_profile(
    "dev",
    settings(
        max_examples=100,
        deadline=None,
        suppress_health_check=_hc(HealthCheck.too_slow, HealthCheck.filter_too_much),
        verbosity=Verbosity.normal,
    ),
)

settings.register_profile(
    "ci",
    settings(
        max_examples=300,
        deadline=None,
        suppress_health_check=_hc(HealthCheck.too_slow, HealthCheck.filter_too_much),
        verbosity=Verbosity.verbose,
        derandomize=True,
    ),
)

settings.register_profile(
    "fast",
    settings(max_examples=25, deadline=None, suppress_health_check=_hc(HealthCheck.too_slow)),
)


def _env_truthy(name: str) -> bool:
    return (os.getenv(name) or "").lower() not in ("", "0", "false", "no", "off")


_active: Final[str] = os.getenv("HYPOTHESIS_PROFILE") or ("ci" if _env_truthy("CI") else "dev")
settings.load_profile(_active)


def active_profile() -> str:
    return _active


# ---- strategies ---------------------------------------------------------------

# ASCII identifiers as they appear in contract ABIs
identifiers = st.from_regex(r"[a-zA-Z][a-zA-Z0-9]{0,11}", fullmatch=True)

param_types = st.sampled_from(list(ParamType))

parameters = st.builds(Parameter, name=identifiers, type=param_types)


def methods(names=None):
    """Manifest methods; pass a small ``names`` strategy to force overloads."""
    return st.builds(
        Method,
        name=names if names is not None else identifiers,
        parameters=st.lists(parameters, max_size=4).map(tuple),
        return_type=param_types,
        safe=st.booleans(),
    )


__all__ = ["st", "given", "active_profile", "identifiers", "param_types", "parameters", "methods"]
