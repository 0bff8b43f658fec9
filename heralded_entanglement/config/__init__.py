"""Configuration management for heralded entanglement calculations."""

from typing import Dict, Any
import json
from dataclasses import asdict

from ..models import TransducerParameters

class ConfigManager:
    """Manages calculation configuration and parameters."""

    @staticmethod
    def load_config(filepath: str) -> Dict[str, Any]:
        """Load configuration from a JSON file."""
        with open(filepath, 'r') as f:
            return json.load(f)

    @staticmethod
    def save_config(config: Dict[str, Any], filepath: str) -> None:
        """Save configuration to a JSON file."""
        with open(filepath, 'w') as f:
            json.dump(config, f, indent=2)

    @staticmethod
    def validate_config(config: Dict[str, Any]) -> bool:
        """Validate configuration dictionary."""
        required_sections = ['transducer', 'simulation', 'sweep']
        for section in required_sections:
            if section not in config:
                raise ValueError(f"Missing required section: {section}")
        unknown = set(config['transducer']) - set(TransducerParameters.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown transducer parameters: {sorted(unknown)}")
        return True

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """Create parameter objects from configuration dictionary."""
        cls.validate_config(config_dict)
        defaults = get_default_config()

        return {
            'transducer': TransducerParameters(**config_dict['transducer']),
            'simulation': {**defaults['simulation'], **config_dict['simulation']},
            'sweep': {**defaults['sweep'], **config_dict['sweep']}
        }

    @classmethod
    def to_dict(cls, params: Dict[str, Any]) -> Dict[str, Any]:
        """Convert parameter objects back to dictionary."""
        transducer = asdict(params['transducer'])
        transducer['detuning'] = params['transducer'].detuning.value
        return {
            'transducer': transducer,
            'simulation': params.get('simulation', {}),
            'sweep': params.get('sweep', {})
        }

# Default configuration: typical state-of-the-art hardware
def get_default_config() -> Dict[str, Any]:
    """Get default configuration parameters."""
    return {
        "transducer": {
            "g0": 1.0e3,  # 1/s
            "n_p": 1.0e6,
            "gamma_e": 1.0e8,  # 1/s
            "gamma_i": 1.0e8,  # 1/s
            "pulse_duration": 1.0e-7,  # s
            "reset_time": 1.0e-6,  # s
            "detuning": "blue"
        },
        "simulation": {
            "num_points": 1001,
            "rtol": 1e-7,
            "atol": 1e-9,
            "make_plots": True
        },
        "sweep": {
            "step": 0.1,
            "log_rate": True
        }
    }
