from chunking_service.core.config import Settings


def get_test_settings(**overrides) -> Settings:
    """Returns a Settings instance for testing.

    Ignores any local ``.env`` file so tests see the documented defaults
    plus whatever *overrides* they pass.
    """
    return Settings(_env_file=None, **overrides)
