"""Tests for the command line entry point."""

import json

import pytest

from upgradekit import cli
from upgradekit.compatibility import CheckSettings, MemoryCheckScope
from upgradekit.compatibility import engine
from upgradekit.hardware import PlatformProfile
from upgradekit.presentation import Mode
from upgradekit.tables import RetrievalResult

INTEL_CPU = "Intel(R) Core(TM) i7-10700K CPU @ 3.80GHz"
SUPPORTED = [{"Brand": "Core", "Model": "i7-10700K"}]


def run(mode, facts, fetcher, presenter, processor_name=INTEL_CPU, settings=None):
    return cli.run_check(
        mode=mode,
        settings=settings or CheckSettings(),
        processor_name=processor_name,
        facts=facts,
        presenter=presenter,
        fetcher=fetcher,
    )


def test_compatible_machine_exits_zero(good_facts, fetcher_factory, presenter_factory):
    presenter = presenter_factory()
    assert run(Mode.GUI_HARD, good_facts, fetcher_factory(records=SUPPORTED), presenter) == cli.EXIT_SUCCESS
    assert presenter.requests == []


def test_silent_mode_shows_no_dialog(good_facts, fetcher_factory, presenter_factory):
    presenter = presenter_factory()
    assert run(Mode.SILENT, good_facts, fetcher_factory(), presenter) == cli.EXIT_FAILURE
    assert presenter.requests == []


def test_gui_hard_shows_dialog_without_override(good_facts, fetcher_factory, presenter_factory):
    presenter = presenter_factory(answer=True)
    assert run(Mode.GUI_HARD, good_facts, fetcher_factory(), presenter) == cli.EXIT_FAILURE
    (request, allow_override), = presenter.requests
    assert allow_override is False
    assert request.error_code == 1


def test_gui_soft_override_exits_zero(good_facts, fetcher_factory, presenter_factory):
    presenter = presenter_factory(answer=True)
    assert run(Mode.GUI_SOFT, good_facts, fetcher_factory(), presenter) == cli.EXIT_SUCCESS
    assert presenter.requests[0][1] is True


def test_gui_soft_declined_exits_one(good_facts, fetcher_factory, presenter_factory):
    presenter = presenter_factory(answer=False)
    assert run(Mode.GUI_SOFT, good_facts, fetcher_factory(), presenter) == cli.EXIT_FAILURE


def test_unsupported_manufacturer_aborts_without_dialog(good_facts, fetcher_factory, presenter_factory):
    presenter = presenter_factory()
    settings = CheckSettings(vendor_urls={"Intel": "https://example.test/intel"})
    code = run(Mode.GUI_HARD, good_facts, fetcher_factory(), presenter, "AMD Ryzen 5 3600", settings)
    assert code == cli.EXIT_FAILURE
    assert presenter.requests == []


def test_parse_failure_shows_dialog(good_facts, fetcher_factory, presenter_factory):
    presenter = presenter_factory()
    code = run(Mode.GUI_HARD, good_facts, fetcher_factory(), presenter, "Genuine Processor")
    assert code == cli.EXIT_FAILURE
    assert "Genuine Processor" in presenter.requests[0][0].message


def test_abort_on_retrieval_failure(good_facts, fetcher_factory, presenter_factory):
    presenter = presenter_factory()
    settings = CheckSettings(abort_on_retrieval_failure=True)
    code = run(Mode.GUI_HARD, good_facts, fetcher_factory(error="timed out"), presenter, settings=settings)
    assert code == cli.EXIT_FAILURE
    assert "timed out" in presenter.requests[0][0].message


def test_argument_parsing():
    args = cli.create_argument_parser().parse_args(
        ["--mode", "GUISoft", "--memory-check", "physical", "--abort-on-retrieval-failure", "--timeout", "5"]
    )
    settings = cli.settings_from_args(args)
    assert Mode(args.mode) is Mode.GUI_SOFT
    assert settings.memory_check_scope is MemoryCheckScope.PHYSICAL
    assert settings.abort_on_retrieval_failure
    assert settings.request_timeout == 5


def test_invalid_mode_is_rejected():
    with pytest.raises(SystemExit):
        cli.create_argument_parser().parse_args(["--mode", "Loud"])


def test_main_prints_json(monkeypatch, capsys, good_facts):
    profile = PlatformProfile(os={"platform": "Windows"}, processor_name=INTEL_CPU, facts=good_facts)
    monkeypatch.setattr(cli, "platform_profile", lambda: profile)
    monkeypatch.setattr(
        engine,
        "fetch_compatibility_records",
        lambda url, index, timeout: RetrievalResult(url=url, records=SUPPORTED),
    )

    assert cli.main(["--json"]) == cli.EXIT_SUCCESS
    verdict = json.loads(capsys.readouterr().out)
    assert verdict["final"] is True
    assert verdict["processor"] == "Intel Core i7-10700K"


def test_main_cpu_override(monkeypatch, capsys, good_facts):
    profile = PlatformProfile(os={"platform": "Windows"}, processor_name=INTEL_CPU, facts=good_facts)
    monkeypatch.setattr(cli, "platform_profile", lambda: profile)
    monkeypatch.setattr(
        engine,
        "fetch_compatibility_records",
        lambda url, index, timeout: RetrievalResult(url=url, records=SUPPORTED),
    )

    assert cli.main(["--cpu", "Intel(R) Pentium(R) CPU G4560 @ 3.50GHz"]) == cli.EXIT_FAILURE
    out = capsys.readouterr().out
    assert "NOT COMPATIBLE" in out
    assert "Intel Pentium G4560" in out


def test_secure_boot_off_exits_one_with_cpu_checks_passing(capsys, good_facts, fetcher_factory, presenter_factory):
    facts = good_facts.model_copy(update={"secure_boot": False})
    presenter = presenter_factory()
    assert run(Mode.SILENT, facts, fetcher_factory(records=SUPPORTED), presenter) == cli.EXIT_FAILURE

    out = capsys.readouterr().out
    assert "Manufacturer: True" in out
    assert "Brand:        True" in out
    assert "Model:        True" in out
    assert "Secure Boot:  False" in out
    assert "Failed:       platform" in out


def test_parse_failure_still_prints_firmware_facts(capsys, good_facts, fetcher_factory, presenter_factory):
    code = run(Mode.SILENT, good_facts, fetcher_factory(), presenter_factory(), "Genuine Processor")
    assert code == cli.EXIT_FAILURE

    out = capsys.readouterr().out
    assert "CHECK FAILED" in out
    assert "Genuine Processor" in out
    assert "UEFI boot:    True" in out
    assert "TPM 2.0:      True" in out


def test_json_output_includes_facts(capsys, good_facts, fetcher_factory, presenter_factory):
    facts = good_facts.model_copy(update={"tpm_is_v2": False})
    code = cli.run_check(
        mode=Mode.SILENT,
        processor_name=INTEL_CPU,
        facts=facts,
        presenter=presenter_factory(),
        fetcher=fetcher_factory(records=SUPPORTED),
        as_json=True,
    )
    assert code == cli.EXIT_FAILURE
    payload = json.loads(capsys.readouterr().out)
    assert payload["final"] is False
    assert payload["facts"]["tpm_is_v2"] is False
    assert payload["brand_ok"] is True
