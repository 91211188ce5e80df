# License: BSD 3 clause

import numpy as np
import biotite.structure as struc
import biotite.structure.io.pdbx as pdbx
import biotite.database.rcsb as rcsb
import springlaws


PDB_ID = "1L2Y"
CUTOFF = 13.0
# Spring functions for bonded and non-bonded CA pairs,
# configured from a single parameter list as it may appear in a
# configuration file
SPRING_NAMES = ["ConstBonded", "HCA"]
PARAMS = [82.0, 4.0, 205.5, 571.2, 305.9e3, 6.0]


# Load structure and filter CA atoms
pdbx_file = pdbx.BinaryCIFFile.read(rcsb.fetch(PDB_ID, "bcif"))
structure = pdbx.get_structure(pdbx_file, model=1)
ca = structure[
    struc.filter_amino_acids(structure) & (structure.atom_name == "CA")
]

bonded_spring, nonbonded_spring = springlaws.spring_chain(
    SPRING_NAMES, PARAMS
)
for spring in (bonded_spring, nonbonded_spring):
    if not spring.valid_params():
        raise ValueError(f"Invalid parameters for {spring}")

# Find all CA pairs within cutoff distance
cell_list = struc.CellList(ca, CUTOFF)
adj_matrix = cell_list.create_adjacency_matrix(CUTOFF)
np.fill_diagonal(adj_matrix, False)
pairs = np.stack(np.where(np.triu(adj_matrix)), axis=-1)
is_bonded = (pairs[:, 1] - pairs[:, 0] == 1)

constants = np.zeros((len(pairs), 3, 3))
constants[is_bonded] = springlaws.spring_constants(
    ca, pairs[is_bonded], bonded_spring
)
constants[~is_bonded] = springlaws.spring_constants(
    ca, pairs[~is_bonded], nonbonded_spring
)

print(f"{len(pairs)} interacting CA pairs")
print("Spring constants of the first pairs:")
for (i, j), constant in zip(pairs[:5], constants[:5]):
    print(f"{i:>3d} {j:>3d}   {constant[0, 0]:.3f}")
