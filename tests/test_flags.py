import pytest

from buildmode.flags import NO_DEFAULT_FEATURES, FlagSet


@pytest.mark.unit
def test_from_environ_reads_only_recognised_flags():
    flags = FlagSet.from_environ({"CLIPPY": "yes", "TRAVIS_JOB_ID": "1234", "UNRELATED": "x"})

    assert flags.CLIPPY == "yes"
    assert flags.TRAVIS_JOB_ID == "1234"
    assert "UNRELATED" not in flags.to_dict()


@pytest.mark.unit
def test_absent_flags_read_as_empty_string():
    flags = FlagSet.from_environ({})

    assert all(value == "" for value in flags.to_dict().values())
    assert flags.get("DOCS") == ""
    assert flags.get("NOT_A_FLAG") == ""


@pytest.mark.unit
def test_from_environ_defaults_to_process_environment(monkeypatch):
    monkeypatch.setenv("DOCS", "yes")
    monkeypatch.delenv("CLIPPY", raising=False)

    flags = FlagSet.from_environ()

    assert flags.DOCS == "yes"
    assert flags.CLIPPY == ""


@pytest.mark.unit
def test_is_yes_accepts_exact_yes():
    assert FlagSet(COVERAGE="yes").is_yes("COVERAGE") is True


@pytest.mark.unit
@pytest.mark.parametrize("value", ["", "no", "YES", "Yes", "true", "1", " yes"])
def test_is_yes_rejects_anything_else(value):
    assert FlagSet(COVERAGE=value).is_yes("COVERAGE") is False


@pytest.mark.unit
def test_build_args_when_html_reports_disabled():
    assert FlagSet(HTML_REPORTS="no").build_args == (NO_DEFAULT_FEATURES,)


@pytest.mark.unit
@pytest.mark.parametrize("value", ["", "yes", "NO", "false"])
def test_build_args_empty_for_other_values(value):
    assert FlagSet(HTML_REPORTS=value).build_args == ()


@pytest.mark.unit
def test_flagset_is_immutable():
    flags = FlagSet(CLIPPY="yes")
    with pytest.raises(AttributeError):
        flags.CLIPPY = "no"  # type: ignore[misc]


@pytest.mark.unit
def test_stable_toolchain_is_exact_match():
    assert FlagSet(TRAVIS_RUST_VERSION="stable").is_stable_toolchain is True
    assert FlagSet(TRAVIS_RUST_VERSION="beta").is_stable_toolchain is False
    assert FlagSet().is_stable_toolchain is False
