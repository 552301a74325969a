from miperize.workflows import doctor


def test_doctor_report_checks_dependencies():
    report = doctor.build_doctor_report()
    names = {check["name"]: check for check in report["dependencies"]}
    assert report["ok"] is True
    for dist in ("aiohttp", "beautifulsoup4", "Pillow"):
        assert names[dist]["status"] == "ok"


def test_doctor_report_shows_effective_probe_settings(monkeypatch):
    monkeypatch.setenv("MIPERIZE_PROBE_TIMEOUT", "2.5")
    monkeypatch.delenv("MIPERIZE_USER_AGENT", raising=False)
    report = doctor.build_doctor_report()
    settings = {check["name"]: check for check in report["probe_settings"]}

    assert settings["MIPERIZE_PROBE_TIMEOUT"]["status"] == "set"
    assert settings["MIPERIZE_PROBE_TIMEOUT"]["value"] == "2.5"
    assert "2.5s" in settings["MIPERIZE_PROBE_TIMEOUT"]["detail"]
    assert settings["MIPERIZE_USER_AGENT"]["status"] == "default"


def test_doctor_flags_missing_dependency(monkeypatch):
    real = doctor._module_version
    monkeypatch.setattr(doctor, "_module_version", lambda name: None if name == "PIL" else real(name))
    report = doctor.build_doctor_report()
    assert report["ok"] is False
    text = doctor.format_doctor_report(report)
    assert "Pillow: missing - image dimensions cannot be decoded" in text
    assert "remedy: pip install Pillow" in text
