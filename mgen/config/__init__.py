from .load import load_config, cfg_path
from .model import GeneratorConfig, CFG_FILE

__all__ = ["GeneratorConfig", "CFG_FILE", "load_config", "cfg_path"]
