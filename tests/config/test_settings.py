from catalog.config.settings import AppSettings, settings


def test_settings_config():
    assert AppSettings.model_config["env_file"] == ".env"
    assert AppSettings.model_config["case_sensitive"] is True


def test_search_defaults():
    assert settings.SEARCH.EXACT_WEIGHT == 10.0
    assert settings.SEARCH.PARTIAL_WEIGHT == 1.0
    assert settings.SEARCH.SIMILARITY_WEIGHT == 5.0
    assert settings.SEARCH.MIN_PARTIAL_LENGTH == 3
