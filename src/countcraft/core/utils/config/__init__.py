from .base import (
    COUNT_MODES,
    DEFAULT_DEBOUNCE_SECONDS,
    MESSAGES,
    PLUGIN_NAME,
)
from .counters import CounterSettings
from .system import LoggingConfig
from .main import (
    CountCraftConfig,
    get_config,
    load_config,
    reset_config,
    set_config,
)

