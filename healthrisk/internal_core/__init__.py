from .config import ProfilerConfig, load_config

__all__ = ["ProfilerConfig", "load_config"]
