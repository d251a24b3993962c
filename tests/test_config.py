"""Tests for loading and saving reaction block configurations."""

from pathlib import Path

import pytest

from plasmachem.config import AVOGADRO, ReactionConfig
from plasmachem.errors import ConfigError
from plasmachem.species import Species, species_from_config

TEST_DATA = Path(__file__).parent / "test_data"


class TestConfigFiles:
    @pytest.fixture
    def config(self):
        return ReactionConfig.from_yaml(str(TEST_DATA / "argon.yaml"))

    def test_load_yaml(self, config):
        assert config.name == "argon"
        assert config.species == ["e", "Ar+", "Ar*"]
        assert config.aux_species == ["Ar"]
        assert config.interpolation_type == "linear"
        # Keys missing from the file keep their defaults
        assert config.sampling_variable == "reduced_field"
        assert config.position_units == 1.0

    def test_yaml_round_trip(self, config, tmp_path):
        path = tmp_path / "config.yaml"
        config.to_yaml(str(path))
        assert ReactionConfig.from_yaml(str(path)) == config

    def test_json_round_trip(self, config, tmp_path):
        path = tmp_path / "config.json"
        config.to_json(str(path))
        assert ReactionConfig.from_json(str(path)) == config

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert ReactionConfig.from_yaml(str(path)) == ReactionConfig()

    def test_unknown_key_in_file(self, tmp_path):
        path = tmp_path / "typo.yaml"
        path.write_text("species: [A]\nconvert_to_mole: true\n")
        with pytest.raises(ConfigError, match="convert_to_mole"):
            ReactionConfig.from_yaml(str(path))


class TestDerivedSettings:
    def test_mole_factor(self):
        assert ReactionConfig().mole_factor == 1.0
        assert ReactionConfig(convert_to_moles=True).mole_factor == AVOGADRO

    def test_aux_prefix(self):
        assert ReactionConfig().aux_prefix == ""
        assert ReactionConfig(name="air").aux_prefix == "air_"


def test_species_from_config():
    config = ReactionConfig(
        species=["e", "O", "O2"], num_particles=[0, 1, 2], electron_density="e"
    )
    species = species_from_config(config)
    assert species == ["e", "O", "O2"]
    assert species[0].is_electron
    assert species[2] == Species("O2", 2)
    assert species[2].num_particles == 2
    assert species_from_config(ReactionConfig(species=["A"]))[0].num_particles is None
