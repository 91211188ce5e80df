"""
This module contains functionality for creating spring functions by
their name, e.g. from user input.
"""

__name__ = "springlaws"
__author__ = "The springlaws contributors"
__all__ = ["SPRING_FUNCTIONS", "spring_names", "spring_factory",
           "spring_chain"]

from types import MappingProxyType
from .errors import BadSpringFunction, BadSpringParameter
from .spring import (DistanceCutoff, DistanceWeight, ExponentialDistance,
                     HCA, ConstBonded)


SPRING_FUNCTIONS = MappingProxyType({
    "DistanceCutoff"      : DistanceCutoff,
    "DistanceWeight"      : DistanceWeight,
    "ExponentialDistance" : ExponentialDistance,
    "HCA"                 : HCA,
    "ConstBonded"         : ConstBonded,
})


def spring_names():
    """
    Get the names of all spring functions known to
    :func:`spring_factory()`.

    Returns
    -------
    names : list of str
        The spring function names.
    """
    return list(SPRING_FUNCTIONS.keys())


def spring_factory(name, **params):
    """
    Create a new spring function by its name.

    Parameters
    ----------
    name : str
        The name of the spring function.
        Must be one of :func:`spring_names()`.
    **params
        Internal constants of the spring function, given by their name
        in the spring function's :attr:`param_names`.
        Constants that are not given keep their default value.

    Returns
    -------
    spring_function : SpringFunction
        A new instance of the requested spring function.

    Raises
    ------
    BadSpringFunction
        If no spring function with the given name exists.
    BadSpringParameter
        If a constant is given, that the spring function does not have.

    Notes
    -----
    The constants are not checked with
    :meth:`SpringFunction.valid_params()`.

    Examples
    --------

    >>> spring = spring_factory("HCA", rcut=3.5)
    >>> print(spring)
    HCA(rcut=3.5, a=205.5, b=571.2, c=305900.0, d=6.0)
    """
    try:
        spring_class = SPRING_FUNCTIONS[name]
    except KeyError:
        raise BadSpringFunction(
            f"'{name}' is not a valid spring function, "
            f"choose from {', '.join(spring_names())}"
        )
    unknown = [
        param_name for param_name in params
        if param_name not in spring_class.param_names
    ]
    if len(unknown) > 0:
        raise BadSpringParameter(
            f"{name} has no spring parameter(s) {', '.join(unknown)}, "
            f"valid parameters are {', '.join(spring_class.param_names)}"
        )
    return spring_class(**params)


def spring_chain(names, params):
    """
    Create multiple spring functions, that are configured from a single
    flat sequence of parameters.

    Each spring function takes its parameters from the end of the
    sequence, beginning with the last spring function in `names`.
    Hence, the parameters must be given in the order of `names`.

    Parameters
    ----------
    names : iterable of str
        The names of the spring functions.
    params : sequence of float
        The parameters for all spring functions.
        The number of parameters must match the sum of
        :attr:`SpringFunction.param_size` of the spring functions.

    Returns
    -------
    spring_functions : list of SpringFunction
        The configured spring functions in the order of `names`.

    Raises
    ------
    BadSpringFunction
        If a name is not a valid spring function.
    BadSpringParameter
        If the number of parameters does not fit the spring functions.

    Examples
    --------

    >>> springs = spring_chain(["DistanceCutoff", "ConstBonded"], [7.0, 10.0])
    >>> print(springs)
    [DistanceCutoff(radius=7.0), ConstBonded(scale=10.0)]
    """
    spring_functions = [spring_factory(name) for name in names]
    remaining = list(params)
    for spring_function in reversed(spring_functions):
        remaining = spring_function.set_params(remaining)
    if len(remaining) > 0:
        raise BadSpringParameter(
            f"{len(remaining)} spring parameter(s) were not used"
        )
    return spring_functions
