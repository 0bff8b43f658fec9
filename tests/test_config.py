import pytest

from heralded_entanglement import ConfigManager, Detuning, TransducerParameters, get_default_config

def test_default_config_builds_parameters():
    params = ConfigManager.from_dict(get_default_config())
    transducer = params['transducer']
    assert isinstance(transducer, TransducerParameters)
    assert transducer == TransducerParameters.from_log_scales()
    assert params['simulation']['num_points'] == 1001
    assert params['sweep']['log_rate'] is True

def test_missing_section():
    config = get_default_config()
    del config['sweep']
    with pytest.raises(ValueError, match="sweep"):
        ConfigManager.from_dict(config)

def test_unknown_transducer_parameter():
    config = get_default_config()
    config['transducer']['kappa'] = 1.0
    with pytest.raises(ValueError, match="kappa"):
        ConfigManager.from_dict(config)

def test_invalid_transducer_value():
    config = get_default_config()
    config['transducer']['gamma_e'] = -1.0
    with pytest.raises(ValueError):
        ConfigManager.from_dict(config)

def test_partial_sections_are_filled_with_defaults():
    config = get_default_config()
    config['simulation'] = {'num_points': 11}
    config['sweep'] = {}
    params = ConfigManager.from_dict(config)
    assert params['simulation']['num_points'] == 11
    assert params['simulation']['rtol'] == 1e-7
    assert params['sweep']['step'] == 0.1

def test_save_and_load(tmp_path):
    config = get_default_config()
    config['transducer']['detuning'] = "red"
    path = tmp_path / "config.json"
    ConfigManager.save_config(config, str(path))
    params = ConfigManager.from_dict(ConfigManager.load_config(str(path)))
    assert params['transducer'].detuning is Detuning.RED
    assert ConfigManager.to_dict(params)['transducer'] == config['transducer']
