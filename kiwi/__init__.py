"""Component store, guarded components, input state, camera, textures and render pipeline ordering."""

__version__ = "0.1.0"