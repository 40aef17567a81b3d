import os

from utils.logging_config import setup_logging, get_logger

# Initialize logging
setup_logging()
logger = get_logger(__name__)

# Settings names recognized in a settings file, mapped to environment variables
SETTINGS_ENV_VARS = {
    "DATA_SOURCE": "TASK_ASSIGNING_DB_DS",
    "USERS_INITIALIZER": "TASK_ASSIGNING_DB_USERS_INITIALIZER",
    "USERS_SET_SIZE": "TASK_ASSIGNING_DB_USERS_SET_SIZE",
}


### SETTINGS ###
def load_settings(settings_file: str) -> bool:
    """
    Load directory settings from a Python file into environment variables.

    Only the names present in the file are exported, so a settings file can
    override a single option and leave the rest to their defaults.

    Args:
        settings_file (str): Path to the Python file containing the settings

    Returns:
        bool: True if settings were loaded successfully
    """
    try:
        import importlib.util

        spec = importlib.util.spec_from_file_location("settings", settings_file)
        settings = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(settings)

        loaded = 0
        for name, env_var in SETTINGS_ENV_VARS.items():
            if hasattr(settings, name):
                os.environ[env_var] = str(getattr(settings, name))
                loaded += 1

        logger.debug(f"Loaded {loaded} setting(s) from {settings_file}")
        return True

    except Exception as e:
        logger.error(f"Failed to load settings from {settings_file}: {str(e)}")
        return False
