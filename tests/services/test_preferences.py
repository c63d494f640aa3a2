from vidafit.services.preferences import LocalPreferences, WATER_REMINDERS_ENABLED_KEY


def test_missing_file_returns_default(tmp_path):
    prefs = LocalPreferences(str(tmp_path / "none.json"))
    assert prefs.get_bool(WATER_REMINDERS_ENABLED_KEY) is False
    assert prefs.get_bool(WATER_REMINDERS_ENABLED_KEY, True) is True


def test_value_survives_new_instance(tmp_path):
    path = str(tmp_path / "nested" / "prefs.json")
    LocalPreferences(path).set_bool(WATER_REMINDERS_ENABLED_KEY, True)

    assert LocalPreferences(path).get_bool(WATER_REMINDERS_ENABLED_KEY) is True


def test_corrupt_file_treated_as_empty(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text("{not json")

    prefs = LocalPreferences(str(path))

    assert prefs.get_bool(WATER_REMINDERS_ENABLED_KEY) is False
    prefs.set_bool(WATER_REMINDERS_ENABLED_KEY, True)
    assert prefs.get_bool(WATER_REMINDERS_ENABLED_KEY) is True


def test_string_values_are_parsed(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text('{"water-reminders-enabled": "true"}')
    assert LocalPreferences(str(path)).get_bool(WATER_REMINDERS_ENABLED_KEY) is True
