"""Valence model and implicit hydrogens."""

from mdlv3000.transform.valence import apply_atom_valence, apply_valence_model

__all__ = [
    "apply_atom_valence",
    "apply_valence_model",
]
