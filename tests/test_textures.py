import pytest

from kiwi.image import Image
from kiwi.textures import TextureCollection, TextureHandle


def _solid(value, size=(2, 2)):
    w, h = size
    return Image(w, h, bytes([value]) * (w * h * 4))


def test_handle_constructors():
    assert TextureHandle.single(5) == TextureHandle(5, 1)
    assert TextureHandle.null() == TextureHandle.single(0)


def test_handle_layer_offsets():
    handle = TextureHandle(3, 2)
    assert [handle.layer(i) for i in range(handle.count)] == [3, 4]


@pytest.mark.parametrize("index", [2, -1])
def test_handle_layer_out_of_range(index):
    with pytest.raises(IndexError):
        TextureHandle(3, 2).layer(index)


def test_add_texture_assigns_sequential_layers():
    coll = TextureCollection("blocks", (2, 2))
    first = coll.add_texture("a", _solid(1))
    second = coll.add_texture("b", _solid(2))
    assert first == TextureHandle.single(0)
    assert second == TextureHandle.single(1)
    assert coll.get_texture("b") == second


def test_add_textures_groups_layers():
    coll = TextureCollection(None, (2, 2))
    coll.add_texture("first", _solid(1))
    handle = coll.add_textures("anim", [_solid(2), _solid(3), _solid(4)])
    assert handle == TextureHandle(1, 3)
    assert coll.layers()[handle.layer(2)] == _solid(4).pixel_bytes()


def test_add_textures_empty():
    coll = TextureCollection(None, (2, 2))
    handle = coll.add_textures("none", [])
    assert handle.count == 0
    assert len(coll) == 0


def test_layers_keep_order():
    coll = TextureCollection(None, (2, 2))
    images = [_solid(9), _solid(8)]
    for i, img in enumerate(images):
        coll.add_texture(str(i), img)
    assert coll.layers() == tuple(img.pixel_bytes() for img in images)


def test_get_missing_texture():
    assert TextureCollection(None, (1, 1)).get_texture("x") is None


def test_invalid_texture_pattern_2x2():
    coll = TextureCollection(None, (2, 2))
    handle = coll.push_invalid_texture()
    black = bytes([0, 0, 0, 255])
    magenta = bytes([255, 0, 255, 255])
    assert coll.layers()[handle.base_layer] == black + magenta + magenta + black


def test_invalid_texture_not_registered_and_appended_last():
    coll = TextureCollection(None, (4, 2))
    coll.add_texture("a", _solid(1, (4, 2)))
    handle = coll.push_invalid_texture()
    assert handle == TextureHandle.single(1)
    assert coll.get_texture("a") == TextureHandle.single(0)
    assert len(coll) == 2


def test_invalid_texture_invariants():
    coll = TextureCollection(None, (4, 6))
    data = coll.layers()[coll.push_invalid_texture().base_layer]
    assert len(data) == 4 * 6 * 4
    assert all(a == 255 for a in data[3::4])
    reds = data[0::4]
    # half of the pixels are magenta
    assert sum(1 for r in reds if r == 255) == 4 * 6 // 2