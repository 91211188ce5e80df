"""
This module contains the spring functions, that define the spring
constants between the nodes of an *Elastic network model*.
"""

__name__ = "springlaws"
__author__ = "The springlaws contributors"
__all__ = ["SpringFunction", "UniformSpringFunction", "DistanceCutoff",
           "DistanceWeight", "ExponentialDistance", "HCA", "ConstBonded"]

import abc
import threading
import warnings
import numpy as np
from .errors import BadSpringParameter, NegativeSpringConstantWarning


class SpringFunction(metaclass=abc.ABCMeta):
    """
    Subclasses of this abstract base class define the spring constants
    between two nodes in an *Elastic network model* as a 3x3 matrix,
    i.e. the superelement of the *Hessian* matrix for the node pair.

    The internal constants of a spring function are set via the
    constructor or :meth:`set_params()`.
    :meth:`set_params()` treats the given parameters as a stack:
    It takes the parameters it needs from the end of the sequence and
    returns the remaining ones, so that a single flat sequence can
    configure multiple spring functions one after another.

    Attributes
    ----------
    name : str
        The name of the spring function, under which it is known to
        :func:`spring_factory()`.
    param_names : tuple of str
        The names of the internal constants in the order they are bound
        by :meth:`set_params()`.
        The last parameter in the given sequence is bound to the last
        name.
    param_size : int
        The number of internal constants.
    params : dict of (str -> float)
        The currently bound internal constants.
    """

    param_names = ()

    def __init__(self):
        self._warned = False
        self._warn_lock = threading.Lock()

    @property
    @abc.abstractmethod
    def name(self):
        pass

    @property
    def param_size(self):
        return len(self.param_names)

    @property
    def params(self):
        return {
            param_name: getattr(self, "_" + param_name)
            for param_name in self.param_names
        }

    def set_params(self, params):
        """
        Set the internal constants from the end of the given parameters.

        Parameters
        ----------
        params : sequence of float
            The parameters.
            It must contain at least :attr:`param_size` values.
            It is not modified.

        Returns
        -------
        remaining : list of float
            The leading parameters, that were not consumed.

        Raises
        ------
        BadSpringParameter
            If less than :attr:`param_size` parameters are given.
            In this case no constant is changed.
        ValueError, TypeError
            If a consumed parameter cannot be converted into a float.
            In this case no constant is changed either.
        """
        params = list(params)
        if len(params) < self.param_size:
            raise BadSpringParameter(
                f"{self.name} requires {self.param_size} spring "
                f"parameter(s), but {len(params)} were given"
            )
        n_remaining = len(params) - self.param_size
        # Convert all values before binding any,
        # to leave the constants unchanged on failure
        values = [float(value) for value in params[n_remaining:]]
        for param_name, value in zip(self.param_names, values):
            setattr(self, "_" + param_name, value)
        return params[:n_remaining]

    @abc.abstractmethod
    def valid_params(self):
        """
        Check whether the currently bound internal constants are valid.

        ABSTRACT: Override when inheriting.

        This method is not called implicitly by any other method.

        Returns
        -------
        valid : bool
            True, if the constants are valid.
        """
        pass

    @abc.abstractmethod
    def constant(self, u, v, d):
        """
        Compute the spring constants between two nodes.

        ABSTRACT: Override when inheriting.

        Parameters
        ----------
        u, v : ndarray, shape=(3,) or shape=(k,3), dtype=float
            The positions of the first and second node of each pair.
        d : ndarray, shape=(3,) or shape=(k,3), dtype=float
            The displacement vector ``v - u`` of each pair.

        Returns
        -------
        constant : ndarray, shape=(3,3) or shape=(k,3,3), dtype=float
            The spring constants for each pair.
        """
        pass

    def __repr__(self):
        params = ", ".join(
            f"{param_name}={value!r}"
            for param_name, value in self.params.items()
        )
        return f"{type(self).__name__}({params})"

    def __getstate__(self):
        state = self.__dict__.copy()
        # Locks cannot be pickled
        del state["_warn_lock"]
        return state

    def __setstate__(self, state):
        self.__dict__.update(state)
        self._warn_lock = threading.Lock()

    def _check_constant(self, constant):
        """
        Set negative spring constants to 0.

        A warning is issued, the first time this happens for this
        instance.
        """
        negative = constant < 0
        if not negative.any():
            return constant
        with self._warn_lock:
            warn = not self._warned
            self._warned = True
        if warn:
            warnings.warn(
                f"Negative spring constants found in {self.name}, "
                f"setting them to 0",
                NegativeSpringConstantWarning, stacklevel=3
            )
        return np.where(negative, 0.0, constant)


class UniformSpringFunction(SpringFunction):
    """
    Base class for spring functions, whose spring constant is uniform
    in all directions, i.e. every element of the 3x3 matrix has the
    same value.

    Subclasses implement :meth:`_constant()`, NOT :meth:`constant()`:
    The value returned by :meth:`_constant()` is set to 0, if it is
    negative, and then copied into each element of the 3x3 matrix.
    """

    def constant(self, u, v, d):
        d = np.asarray(d, dtype=float)
        if d.ndim not in (1, 2) or d.shape[-1] != 3:
            raise ValueError(
                f"Expected displacement with shape (3,) or (k,3), "
                f"got {d.shape}"
            )
        # Constants that do not depend on the geometry are scalars
        # -> Expand them to one value per pair
        constant = np.array(
            np.broadcast_to(self._constant(u, v, d), d.shape[:-1]),
            dtype=float
        )
        constant = self._check_constant(constant)
        return np.array(np.broadcast_to(
            constant[..., np.newaxis, np.newaxis], constant.shape + (3, 3)
        ))

    @abc.abstractmethod
    def _constant(self, u, v, d):
        """
        Compute the scalar spring constant for each pair.

        ABSTRACT: Override when inheriting.

        Parameters
        ----------
        u, v : ndarray, shape=(3,) or shape=(k,3), dtype=float
            The positions of the first and second node of each pair.
        d : ndarray, shape=(3,) or shape=(k,3), dtype=float
            The displacement vector ``v - u`` of each pair.

        Returns
        -------
        constant : float or ndarray, shape=(k,), dtype=float
            The spring constant for each pair.
            May be negative.
        """
        pass


class DistanceCutoff(UniformSpringFunction):
    """
    The spring function of the *traditional* ANM:
    Nodes within the cutoff distance are connected with a spring
    constant of :math:`r^{-2}`, where :math:`r` is the distance between
    the nodes.
    Nodes further apart than the cutoff distance are not connected.

    Parameters
    ----------
    radius : float, optional
        The cutoff distance.
        A pair of nodes is connected, if the distance between them is
        smaller or equal to this value.

    Notes
    -----
    The spring constant is undefined for nodes at the same position.
    """

    param_names = ("radius",)

    def __init__(self, radius=15.0):
        super().__init__()
        self._radius = float(radius)

    @property
    def name(self):
        return "DistanceCutoff"

    def valid_params(self):
        return self._radius > 0

    def _constant(self, u, v, d):
        sq_distance = np.sum(d*d, axis=-1)
        return np.where(
            sq_distance <= self._radius**2, 1 / sq_distance, 0.0
        )


class DistanceWeight(UniformSpringFunction):
    """
    Weight spring constants by the distance :math:`r` between the
    nodes, i.e. :math:`r^p`.

    Parameters
    ----------
    power : float, optional
        The exponent :math:`p`.
        Must be negative, to give closer nodes stronger springs.
    """

    param_names = ("power",)

    def __init__(self, power=-2.0):
        super().__init__()
        self._power = float(power)

    @property
    def name(self):
        return "DistanceWeight"

    def valid_params(self):
        return self._power < 0

    def _constant(self, u, v, d):
        distance = np.sqrt(np.sum(d*d, axis=-1))
        return distance ** self._power


class ExponentialDistance(UniformSpringFunction):
    """
    Weight spring constants exponentially by the distance :math:`r`
    between the nodes, i.e. :math:`\\exp(kr)`.

    Parameters
    ----------
    scale : float, optional
        The scale factor :math:`k`.
    """

    param_names = ("scale",)

    def __init__(self, scale=-1.5):
        super().__init__()
        self._scale = float(scale)

    @property
    def name(self):
        return "ExponentialDistance"

    def valid_params(self):
        return self._scale != 0

    def _constant(self, u, v, d):
        distance = np.sqrt(np.sum(d*d, axis=-1))
        return np.exp(self._scale * distance)


class HCA(UniformSpringFunction):
    r"""
    The bimodal spring function from Hinsen *et al.* [1]_.
    Pairs of nodes within the cutoff distance, i.e. neighbours along the
    backbone, are connected by a spring constant linear in the distance
    :math:`r`, all other pairs by one decreasing with a power of the
    distance:

    .. math::

        k(r) =
        \begin{cases}
            ar - b  & r \leq r_c \\
            cr^{-d} & r > r_c
        \end{cases}

    The default constants are the ones from the original publication.

    Parameters
    ----------
    rcut : float, optional
        The cutoff distance :math:`r_c` between both regimes.
    a, b, c, d : float, optional
        The coefficients of the spring function.

    Notes
    -----
    The function is not continuous at :math:`r_c`.
    Negative spring constants from the linear regime are set to 0.

    References
    ----------
    .. [1] K Hinsen et al.,
        "Harmonicity in small proteins."
        Chemical Physics 261(1-2): 25-37 (2000).
    """

    param_names = ("rcut", "a", "b", "c", "d")

    def __init__(self, rcut=4.0, a=205.5, b=571.2, c=305.9e3, d=6.0):
        super().__init__()
        self._rcut = float(rcut)
        self._a = float(a)
        self._b = float(b)
        self._c = float(c)
        self._d = float(d)

    @property
    def name(self):
        return "HCA"

    def valid_params(self):
        return self._rcut >= 0 and self._d >= 0

    def _constant(self, u, v, d):
        distance = np.sqrt(np.sum(d*d, axis=-1))
        # The power term is also evaluated for distances in the linear
        # regime, including 0
        with np.errstate(divide="ignore"):
            return np.where(
                distance <= self._rcut,
                self._a * distance - self._b,
                self._c * distance ** -self._d
            )


class ConstBonded(UniformSpringFunction):
    """
    Connect nodes with a constant spring, regardless of their distance.

    Parameters
    ----------
    scale : float, optional
        The spring constant.
    """

    param_names = ("scale",)

    def __init__(self, scale=1.0):
        super().__init__()
        self._scale = float(scale)

    @property
    def name(self):
        return "ConstBonded"

    def valid_params(self):
        return self._scale > 0

    def _constant(self, u, v, d):
        return self._scale
