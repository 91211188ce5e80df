"""
This module contains the exception and warning classes raised by the
spring functions and their factory.
"""

__name__ = "springlaws"
__author__ = "The springlaws contributors"
__all__ = ["BadSpringFunction", "BadSpringParameter",
           "NegativeSpringConstantWarning"]


class BadSpringFunction(ValueError):
    """
    Indicates that a spring function was requested by a name, that is
    not known to the factory.
    """
    pass


class BadSpringParameter(ValueError):
    """
    Indicates that a spring function was configured with an
    insufficient or otherwise unusable set of parameters.
    """
    pass


class NegativeSpringConstantWarning(UserWarning):
    """
    Issued once per spring function instance, when a negative spring
    constant is set to 0.
    """
    pass
