"""Game logic for a shape-shifting bead hunt: walk meshes, morph movement, audio mixing, text layout and tutorial flow."""

__version__ = "0.1.0"

__all__ = [
    "beads",
    "catjump",
    "geometry",
    "morphs",
    "sound",
    "splash",
    "textlayout",
    "tutorial",
    "walkmesh",
    "walkmeshes",
]