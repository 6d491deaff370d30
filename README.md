# kiwi

Building blocks for small real-time applications and games. It provides a
component store, guarded shared components, keyboard state, a camera, images
and texture layers, and ordering for render pipelines.

## Installation

```
pip install .
```

To run the test suite, install the test extra and then run `pytest`:

```
pip install ".[test]"
pytest
```

## Modules

- `kiwi.store.ComponentStore` holds at most one component per type.
  - `insert(component)` adds a component and returns a
    `kiwi.handles.ComponentHandle`.
  - `handle_for(type_)` returns a handle even when the component has not been
    inserted yet. A later `insert` fills that slot. Reading through the handle
    before then raises an error.
  - `finish_initialization()` freezes the set of components. After that,
    `insert` raises `RuntimeError`, and `handle_for` raises `KeyError` for
    unknown types.
  - `get`, `get_mut`, `get_checked` and `get_mut_checked` return read or write
    guards.
- `kiwi.resource.ComponentPtr` is a reference-counted component slot.
  - `clone()`, `retain()` and `release()` manage strong references by hand.
  - `downgrade()` returns a `WeakComponentPtr`. Its `upgrade()` gives `None`
    once the value is gone.
  - `read(type_)` and `write(type_)` check the type and raise
    `TypeMismatchError` when it does not match.
  - `uninitialized(type_)` and `initialize(component)` create an empty slot and
    fill it later.
- `kiwi.guards` contains the guard classes.
  - `ComponentReadGuard` allows many readers at once. `ComponentWriteGuard` is
    exclusive and records the call site that took the lock.
  - Each guard exposes the component as `.value`. A write guard can also
    replace it.
  - Guards are context managers, and `release()` can also be called directly.
  - If a thread asks for a lock while it still holds the write lock,
    `DeadlockError` is raised instead of blocking.
- `kiwi.typemap.TypeMap` and `ImmutableTypeMap` map an exact type to one value
  of that type.
- `kiwi.shared.Shared` is a value several owners can read and replace.
  `WeakShared` is a weak reference to it. `Shared.new_cyclic(factory)` lets a
  value hold a weak handle to itself.
- `kiwi.keyboard.Keyboard` tracks key state per frame.
  - Keys can be any hashable value.
  - The states are the `KeyState` members `UP`, `PRESSED`, `RELEASED` and
    `HELD`.
  - `update_keys()` moves pressed keys to held and released keys to up.
- `kiwi.callback.Proxy` calls every registered target in order.
  - A target stays registered only while the `TargetHandle` returned by
    `add_target` is alive.
  - Dead targets are dropped on the next `invoke`.
  - `suspend()` and `unsuspend()` pause and resume dispatch.
- `kiwi.camera.Camera` is a perspective camera with a 90° vertical field of
  view.
  - It is built on `perspective_rh` and `look_at_rh`, which produce numpy 4×4
    matrices.
  - `set_orientation(yaw, pitch)` places the camera at distance 2 from the
    origin, facing it.
  - `projection_view_matrix()` returns the clip-space matrix with depth in
    [0, 1].
- `kiwi.directions.CardinalDirection` lists the six axis directions. It gives
  their float and integer normals and a 3-bit encoding through `to_bits` and
  `from_bits`.
- `kiwi.image.Image` is an immutable RGBA8 image decoded with Pillow by
  `from_mem` or `from_file`. Data that is not an image raises `ValueError`.
- `kiwi.assets.AssetStore` keeps decoded images by name.
- `kiwi.textures.TextureCollection` collects same-sized images as layers of a
  texture array.
  - Each name maps to a `TextureHandle` covering a run of layers.
  - `push_invalid_texture()` adds a black and magenta checkerboard layer.
- `kiwi.pipeline.RenderController` holds `RenderPipeline` objects by key.
  - `set_render_order` sets which pipelines run and in what order.
  - Each `update_pipelines(delta_time)` gives every pipeline a fresh `Stash`
    holding `DeltaTime` and `FrameCount`.
  - A pipeline may return `SetRenderTarget` from `update`. In that case the
    other pipelines render into that target and the requesting pipeline renders
    into the output.
  - `pipeline(key, type_)` returns a pipeline and raises
    `IncorrectPipelineType` when its type differs.

## Example

```python
from kiwi.keyboard import Keyboard
from kiwi.store import ComponentStore

store = ComponentStore()
keyboard_handle = store.insert(Keyboard())
store.finish_initialization()

with keyboard_handle.write() as guard:
    guard.value.press_key("w")

with store.get(Keyboard) as guard:
    assert guard.value.is_key_pressed("w")
```

## What it does not do

kiwi does not draw anything. It does not open windows, talk to a GPU or read
input devices.

- `RenderController.render_pipelines` and `RenderPipeline.render` pass along
  whatever encoder and target objects the caller supplies.
- `TextureCollection` only collects layer pixel bytes. Uploading them is up to
  the caller.
- `Keyboard` records only the key events it is given.