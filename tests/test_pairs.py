import itertools
import warnings
import numpy as np
import pytest
import biotite.structure as struc
import springlaws


@pytest.fixture
def atoms():
    """
    Create a random chain of ``CA`` atoms.
    """
    N_ATOMS = 30
    BOX_SIZE = 30

    np.random.seed(0)
    atoms = struc.AtomArray(N_ATOMS)
    atoms.coord = np.random.rand(N_ATOMS, 3).astype(np.float32) * BOX_SIZE
    atoms.atom_name[:] = "CA"
    atoms.element[:] = "C"
    atoms.res_id[:] = np.arange(1, N_ATOMS + 1)
    return atoms


@pytest.mark.parametrize(
    "name, use_atom_array",
    itertools.product(springlaws.spring_names(), [False, True])
)
def test_spring_constants(atoms, name, use_atom_array):
    """
    Check whether the spring constants for all pairs of atoms equal the
    spring constants of the individual pairs.
    """
    spring = springlaws.spring_factory(name)
    # All pairs of different atoms
    atom_i, atom_j = np.triu_indices(atoms.array_length(), k=1)
    pairs = np.stack([atom_i, atom_j], axis=-1)
    coord = atoms.coord.astype(np.float64)

    with warnings.catch_warnings():
        warnings.simplefilter("ignore", springlaws.NegativeSpringConstantWarning)
        test_constants = springlaws.spring_constants(
            atoms if use_atom_array else coord, pairs, spring
        )
        ref_constants = np.stack([
            spring.constant(coord[i], coord[j], coord[j] - coord[i])
            for i, j in pairs
        ])

    assert test_constants.shape == (len(pairs), 3, 3)
    assert np.allclose(test_constants, ref_constants)


def test_no_pairs(atoms):
    constants = springlaws.spring_constants(
        atoms, np.zeros((0, 2), dtype=int), springlaws.HCA()
    )
    assert constants.shape == (0, 3, 3)


def test_invalid_pairs(atoms):
    spring = springlaws.ConstBonded()
    with pytest.raises(ValueError):
        springlaws.spring_constants(atoms, np.array([0, 1]), spring)
    with pytest.raises(IndexError):
        springlaws.spring_constants(
            atoms, np.array([[0, atoms.array_length()]]), spring
        )


def test_invalid_coord():
    with pytest.raises(ValueError):
        springlaws.spring_constants(
            np.zeros((5, 2)), np.array([[0, 1]]), springlaws.ConstBonded()
        )


def test_double_precision():
    """
    Check whether double precision coordinates are not reduced to
    single precision, which would distort the spring constants of close
    atoms far from the origin.
    """
    coord = np.array([
        [1000.0,    0.0, 0.0],
        [1000.0001, 0.0, 0.0],
    ])
    spring = springlaws.DistanceWeight(-2.0)

    test_constants = springlaws.spring_constants(
        coord, np.array([[0, 1]]), spring
    )
    ref_constant = spring.constant(coord[0], coord[1], coord[1] - coord[0])

    assert test_constants[0] == pytest.approx(ref_constant)
    assert test_constants[0, 0, 0] == pytest.approx(1e8, rel=1e-6)
