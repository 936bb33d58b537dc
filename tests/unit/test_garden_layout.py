"""
Test deterministic garden geometry: generator, beds, grass and plant grids.
"""
import math

import pytest

from herbal_garden.garden import layout
from herbal_garden.garden.layout import SeededRandom


@pytest.mark.unit
class TestSeededRandom:
    def test_known_sequence(self):
        assert SeededRandom(12345).take(3) == [96382 / 233280, 3239 / 233280, 82116 / 233280]

    def test_same_seed_same_sequence(self):
        assert SeededRandom(41000).take(50) == SeededRandom(41000).take(50)

    def test_values_in_unit_interval(self):
        assert all(0.0 <= v < 1.0 for v in SeededRandom(7).take(1000))


@pytest.mark.unit
class TestBeds:
    def test_eight_beds_with_community_boxes(self):
        beds = {b.bed_id: b for b in layout.get_beds()}

        assert set(beds) == {"nw-1", "nw-2", "ne-1", "ne-2", "sw-1", "sw-2", "se-1", "se-2"}
        assert beds["nw-2"].position == (-7.0, 0.0, -13.0)
        assert beds["se-1"].community_box == (7.0, 0.45, 7.0 + 2.5 + 0.6)
        assert beds["sw-1"].inner_size == pytest.approx(4.5)

    def test_unknown_bed(self):
        assert layout.get_bed("zz-9") is None


@pytest.mark.unit
class TestGrass:
    def test_first_blade_follows_draw_order(self):
        blades = layout.generate_grass()

        first = blades[0]
        height = 0.5 + (51493 / 233280) * 0.3
        assert first.position[0] == pytest.approx((96382 / 233280 - 0.5) * 33)
        assert first.position[2] == pytest.approx((3239 / 233280 - 0.5) * 33)
        assert first.scale == pytest.approx((0.4, height, 0.4))
        assert first.position[1] == pytest.approx(height * 0.1)

    def test_deterministic(self):
        assert layout.generate_grass(seed=99, attempts=300) == layout.generate_grass(seed=99, attempts=300)

    def test_blades_avoid_paths_beds_and_fountain(self):
        blades = layout.generate_grass()

        assert 0 < len(blades) <= layout.GRASS_ATTEMPTS
        for blade in blades:
            x, _, z = blade.position
            assert layout.is_valid_grass_position(x, z)
            assert blade.color in layout.GRASS_COLORS
            assert 0.5 <= blade.scale[1] < 1.2
            assert 0.0 <= blade.rotation[1] < 2 * math.pi
            assert -0.175 <= blade.rotation[2] < 0.175

    @pytest.mark.parametrize(
        "x,z",
        [
            (0.0, 10.0),  # vertical path
            (10.0, 1.0),  # horizontal path
            (7.5, -12.5),  # bed ne-2
            (0.5, 0.5),  # fountain at the path crossing
            (16.6, 5.0),  # outside
        ],
    )
    def test_invalid_positions(self, x, z):
        assert not layout.is_valid_grass_position(x, z)

    def test_open_ground_is_valid(self):
        assert layout.is_valid_grass_position(12.0, 3.0)


@pytest.mark.unit
class TestPlantGrid:
    def test_seed_from_model_path_length(self):
        spec = layout.grid_spec_for("mint_freshness.glb")
        assert spec.seed == len("/models/mint_freshness.glb") * 1000
        assert (spec.spacing, spec.jitter) == (1.2, 0.3)

    def test_lemongrass_uses_tight_spacing(self):
        spec = layout.grid_spec_for("lemon_grass.glb")
        assert (spec.spacing, spec.jitter) == (0.3, 0.15)

    def test_three_by_three_grid(self):
        placements = layout.generate_plant_grid("mint_freshness.glb", 3, 3)

        assert len(placements) == 9
        bases = [-1.65, 0.0, 1.65]
        for p in placements:
            assert abs(p.position[0] - bases[p.col]) <= 0.15
            assert abs(p.position[2] - bases[p.row]) <= 0.15
            assert p.position[1] == 0.0
        assert [(p.row, p.col) for p in placements][:4] == [(0, 0), (0, 1), (0, 2), (1, 0)]

    def test_single_plant_is_centred(self):
        (only,) = layout.generate_plant_grid("mint_freshness.glb", 1, 1)
        assert abs(only.position[0]) <= 0.15
        assert abs(only.position[2]) <= 0.15

    def test_draw_order_offset_x_offset_z_rotation(self):
        model = "a_cloesup_shot_of_tulsi_plant.glb"
        r1, r2, r3 = SeededRandom(len(layout.model_path(model)) * 1000).take(3)

        first = layout.generate_plant_grid(model, 2, 2)[0]

        start = -4.5 / 2 + 1.2 / 2
        assert first.position[0] == pytest.approx(start + (r1 - 0.5) * 0.3)
        assert first.position[2] == pytest.approx(start + (r2 - 0.5) * 0.3)
        assert first.rotation == pytest.approx(r3 * 2 * math.pi)

    def test_lemongrass_grid_stays_inside_bed(self):
        placements = layout.generate_plant_grid("lemon_grass.glb", 12, 12)
        assert len(placements) == 144
        for p in placements:
            assert abs(p.position[0]) <= 2.25
            assert abs(p.position[2]) <= 2.25
