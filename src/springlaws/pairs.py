"""
This module contains functionality for computing the spring constants
of multiple node pairs at once.
"""

__name__ = "springlaws"
__author__ = "The springlaws contributors"
__all__ = ["spring_constants"]

import numpy as np
import biotite.structure as struc


def spring_constants(atoms, pairs, spring_function):
    """
    Compute the spring constants between the given pairs of atoms.

    Parameters
    ----------
    atoms : AtomArray, shape=(n,) or ndarray, shape=(n,3), dtype=float
        The atoms or their coordinates that are part of the model.
    pairs : ndarray, shape=(k,2), dtype=int
        Indices to the first and second atom of each pair.
    spring_function : SpringFunction
        The :class:`SpringFunction` that defines the spring constants.

    Returns
    -------
    constants : ndarray, shape=(k,3,3), dtype=float
        The 3x3 spring constant matrix for each pair.
    """
    # Convert into higher precision, as spring functions may diverge
    # for small distances
    # 'struc.coord()' is avoided for plain arrays, as it converts
    # them to single precision
    if isinstance(atoms, struc.AtomArray):
        coord = atoms.coord.astype(np.float64)
    else:
        coord = np.asarray(atoms, dtype=np.float64)
    if coord.ndim != 2 or coord.shape[1] != 3:
        raise ValueError(
            f"Expected coordinates with shape (n,3), got {coord.shape}"
        )
    pairs = np.asarray(pairs, dtype=int)
    if pairs.ndim != 2 or pairs.shape[1] != 2:
        raise ValueError(
            f"Expected pairs with shape (k,2), got {pairs.shape}"
        )
    if len(pairs) == 0:
        return np.zeros((0, 3, 3))
    if pairs.max() >= len(coord) or pairs.min() < 0:
        raise IndexError(
            f"Pair indices must be in range 0 to {len(coord) - 1}, "
            f"got {pairs.min()} to {pairs.max()}"
        )

    # Displacement vectors point from the first to the second atom
    coord_i = coord[pairs[:, 0]]
    coord_j = coord[pairs[:, 1]]
    return spring_function.constant(coord_i, coord_j, coord_j - coord_i)
