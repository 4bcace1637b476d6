import os


def get_settings_module() -> str:
    # APP_ENV wins; ASPNETCORE_ENVIRONMENT is still honoured by older deployments
    env = (os.getenv("APP_ENV") or os.getenv("ASPNETCORE_ENVIRONMENT") or "development").lower()

    if env in {"prod", "production"}:
        return "dairy_system.settings.production"

    if env in {"test", "testing"}:
        return "dairy_system.settings.testing"

    return "dairy_system.settings.development"
