"""
Tests for configuration loading and rule overrides.

Tests:
- Defaults, YAML merge and malformed files
- Threshold updates and persistence
- Validation errors
- RuleSet overrides from the ``rules`` section
"""

import pytest
import yaml

from sds_hazard.rules import DEFAULT_RULES, RuleSet
from sds_hazard.utils.config_manager import DEFAULT_CONFIG_PATH, ConfigManager


# ============================================================================
# LOADING
# ============================================================================

class TestLoading:

    def test_missing_file_uses_defaults(self, tmp_path):
        config = ConfigManager(tmp_path / 'missing.yaml')
        assert config.get_all_config() == ConfigManager.DEFAULT_CONFIG

    def test_merge_with_defaults(self, write_config):
        config = ConfigManager(write_config({'thresholds': {'accept': 0.6}}))
        assert config.get_threshold('accept') == 0.6
        assert config.get_threshold('auto_select') == 0.9
        assert config.get_extraction_param('max_p_codes') == 20

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / 'empty.yaml'
        path.write_text('', encoding='utf-8')
        assert ConfigManager(path).get_all_config() == ConfigManager.DEFAULT_CONFIG

    def test_malformed_yaml_raises(self, tmp_path):
        path = tmp_path / 'broken.yaml'
        path.write_text('thresholds: [auto_select: 0.9\n', encoding='utf-8')
        with pytest.raises(yaml.YAMLError):
            ConfigManager(path)

    def test_load_missing_path_raises(self, default_config, tmp_path):
        with pytest.raises(FileNotFoundError):
            default_config.load_config(tmp_path / 'missing.yaml')

    def test_default_location(self):
        config = ConfigManager.from_default_location()
        assert config.config_path == DEFAULT_CONFIG_PATH
        assert config.validate_config() == []
        assert config.get_weights() == {
            'product_name': 0.4, 'cas_number': 0.3, 'manufacturer': 0.2, 'content_match': 0.1,
        }

    def test_unknown_parameter_raises_key_error(self, default_config):
        with pytest.raises(KeyError):
            default_config.get_threshold('reject')
        with pytest.raises(KeyError):
            default_config.get_extraction_param('section5_window')

    def test_get_all_config_is_a_copy(self, default_config):
        snapshot = default_config.get_all_config()
        snapshot['thresholds']['accept'] = 0.1
        assert default_config.get_threshold('accept') == 0.7


# ============================================================================
# UPDATES / PERSISTENCE
# ============================================================================

class TestUpdates:

    def test_update_threshold(self, default_config):
        default_config.update_threshold('accept', 0.5)
        assert default_config.get_threshold('accept') == 0.5

    def test_update_threshold_out_of_range(self, default_config):
        with pytest.raises(ValueError):
            default_config.update_threshold('accept', 1.2)

    def test_bulk_update_is_all_or_nothing(self, default_config):
        with pytest.raises(ValueError):
            default_config.update_thresholds_bulk({'accept': 0.5, 'auto_select': -0.1})
        assert default_config.get_threshold('accept') == 0.7

        default_config.update_thresholds_bulk({'accept': 0.5, 'auto_select': 0.8})
        assert default_config.get_threshold('auto_select') == 0.8

    def test_save_and_reload(self, default_config, tmp_path):
        path = tmp_path / 'nested' / 'saved.yaml'
        default_config.update_threshold('accept', 0.65)
        default_config.save_config(path)

        reloaded = ConfigManager(path)
        assert reloaded.get_threshold('accept') == 0.65
        assert reloaded.get_all_config() == default_config.get_all_config()

    def test_save_without_path(self, default_config):
        with pytest.raises(ValueError):
            default_config.save_config()

    def test_reset_to_defaults(self, default_config):
        default_config.update_threshold('accept', 0.2)
        default_config.reset_to_defaults()
        assert default_config.get_threshold('accept') == 0.7


# ============================================================================
# VALIDATION
# ============================================================================

class TestValidation:

    def test_defaults_are_valid(self, default_config):
        assert default_config.validate_config() == []

    def test_weights_must_sum_to_one(self, write_config):
        config = ConfigManager(write_config({'weights': {'product_name': 0.9}}))
        assert any('sum to 1' in e for e in config.validate_config())

    def test_negative_weight(self, write_config):
        config = ConfigManager(write_config({'weights': {'product_name': -0.4}}))
        assert "Weights must be non-negative numbers" in config.validate_config()

    def test_threshold_range(self, write_config):
        config = ConfigManager(write_config({'thresholds': {'accept': 1.5}}))
        assert config.validate_config() == ["Threshold 'accept' must be between 0 and 1, got 1.5"]

    @pytest.mark.parametrize("value", [0, -2, 'four'])
    def test_max_workers(self, write_config, value):
        config = ConfigManager(write_config({'batch': {'max_workers': value}}))
        assert "max_workers must be a positive integer" in config.validate_config()

    def test_extraction_windows(self, write_config):
        config = ConfigManager(write_config({'extraction': {'section2_window': 0, 'max_p_codes': True}}))
        errors = config.validate_config()
        assert "section2_window must be a positive integer" in errors
        assert "max_p_codes must be a positive integer" in errors

    def test_readable_threshold(self, write_config):
        config = ConfigManager(write_config({'quality': {'readable_threshold': 150}}))
        assert "readable_threshold must be an integer between 0 and 100" in config.validate_config()


# ============================================================================
# RULE OVERRIDES
# ============================================================================

class TestRuleOverrides:

    def test_no_overrides(self, default_config):
        assert default_config.get_rule_overrides() == {}
        assert RuleSet.from_overrides(None) == DEFAULT_RULES

    def test_overrides_from_file(self, write_config):
        config = ConfigManager(write_config({'rules': {
            'default_health_rating': 0,
            'physical_hazard_keywords': ['Flammable', 'Pyrophoric'],
        }}))
        rules = RuleSet.from_overrides(config.get_rule_overrides())
        assert rules.default_health_rating == 0
        assert rules.physical_hazard_keywords == ('flammable', 'pyrophoric')
        assert rules.ppe_profiles == DEFAULT_RULES.ppe_profiles

    def test_pictogram_synonyms(self):
        rules = RuleSet.from_overrides({'pictogram_synonyms': {'ghs02': ['Fire']}})
        assert rules.pictogram_synonyms == {'GHS02': ('fire',)}

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="Unsupported rule overrides"):
            RuleSet.from_overrides({'hmis_colors': {}})

    def test_invalid_ppe_code(self):
        with pytest.raises(ValueError):
            RuleSet.from_overrides({'ppe_profiles': [{'code': 'Z', 'requires': [['gloves']]}]})

    def test_ask_supervisor_is_not_a_profile(self):
        with pytest.raises(ValueError):
            RuleSet.from_overrides({'ppe_profiles': [{'code': 'X', 'requires': [['gloves']]}]})

    @pytest.mark.parametrize("overrides", [
        {'default_hazard_category': 0},
        {'default_hazard_category': -1},
        {'default_health_rating': 5},
        {'default_health_rating': -1},
        {'default_health_rating': 'high'},
        {'default_hazard_category': True},
    ])
    def test_default_values_out_of_range(self, overrides):
        with pytest.raises(ValueError):
            RuleSet.from_overrides(overrides)

    def test_defaults_validated_on_direct_construction(self):
        with pytest.raises(ValueError, match="default_health_rating"):
            RuleSet(default_health_rating=7)

    def test_classifier_rejects_invalid_rule_file(self, write_config):
        from sds_hazard.pipeline.orchestrator import SDSClassifier
        config = ConfigManager(write_config({'rules': {'default_health_rating': 7}}))
        with pytest.raises(ValueError):
            SDSClassifier(config=config)

    def test_unknown_pictogram_code(self):
        with pytest.raises(ValueError, match="Unknown pictogram code"):
            RuleSet.from_overrides({'pictogram_synonyms': {'GHS10': ['skull']}})

    def test_rule_set_is_immutable(self):
        with pytest.raises(Exception):
            DEFAULT_RULES.default_health_rating = 3
        with pytest.raises(TypeError):
            DEFAULT_RULES.pictogram_names['GHS02'] = 'fire'
