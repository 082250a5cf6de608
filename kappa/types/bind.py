from __future__ import annotations

from typing import List

from kappa import LispValue
from kappa.types.arity import ArityBody
from kappa.types.environment import Environment
from kappa.types.function import Closure
from kappa.types.persistent_list import PersistentList


def bind_arguments(
    callee: Closure,
    body: ArityBody,
    supplied_args: List[LispValue],
) -> Environment:
    """
    Single source of truth for parameter binding in Kappa, shared by function
    calls and macro expansion.

    Returns a new Environment whose outer is the callee's captured environment,
    populated with:
    - the callee's self-name (if any), bound to the callee itself
    - each fixed parameter, positionally
    - the variadic parameter (if any), bound to a list of the remaining args

    `body` must already have been selected for len(supplied_args).
    """
    local_env = callee.env.child()

    # Parameters are bound after the self-name so they shadow it.
    if callee.name is not None:
        local_env.define(callee.name, callee)

    for formal, value in zip(body.params, supplied_args):
        local_env.define(formal, value)

    if body.variadic is not None:
        remaining = supplied_args[body.fixed_count:]
        local_env.define(body.variadic, PersistentList.from_iterable(remaining))

    return local_env
