from ocif.palette import PALETTE, find_closest_color, from_rgb, quantize, to_rgb


def test_palette_has_256_distinct_entries():
    assert len(PALETTE) == 256
    assert len(set(PALETTE)) == 256
    assert all(0 <= c <= 0xFFFFFF for c in PALETTE)


def test_palette_layout():
    assert PALETTE[0] == 0x000000
    assert PALETTE[1] == 0x000040
    assert PALETTE[5] == 0x002400
    assert PALETTE[239] == 0xFFFFFF
    assert PALETTE[240] == 0x0F0F0F
    assert PALETTE[255] == 0xF0F0F0


def test_rgb_conversion():
    assert to_rgb(0xFF8000) == (255, 128, 0)
    assert from_rgb(255, 128, 0) == 0xFF8000


def test_rgb_roundtrip_over_channel_values():
    for value in (0, 1, 127, 128, 254, 255):
        assert to_rgb(from_rgb(value, 255 - value, value // 2)) == (value, 255 - value, value // 2)


def test_palette_entries_map_to_themselves():
    for index, color in enumerate(PALETTE):
        assert find_closest_color(color) == index


def test_near_white_and_near_black():
    assert find_closest_color(0xFEFEFE) == PALETTE.index(0xFFFFFF)
    assert find_closest_color(0x010101) == PALETTE.index(0x000000)


def test_ties_resolve_to_lowest_index():
    # 0xFF0020 is exactly between 0xFF0000 and 0xFF0040
    assert find_closest_color(0xFF0020) == PALETTE.index(0xFF0000)
    assert PALETTE.index(0xFF0000) < PALETTE.index(0xFF0040)


def test_search_is_deterministic():
    colors = [0x123456, 0xABCDEF, 0x7F7F7F, 0x00FF7F]
    first = [find_closest_color(c) for c in colors]
    assert [find_closest_color(c) for c in colors] == first


def test_quantize_returns_palette_color():
    assert quantize(0xFEFEFE) == 0xFFFFFF
    assert quantize(0x123456) in PALETTE
