import os


def get_settings_module() -> str:
    # APP_ENV selects the settings module; development is the default.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "class_register.settings.production"

    if env in {"test", "testing"}:
        return "class_register.settings.testing"

    return "class_register.settings.development"
