from __future__ import annotations

import pytest

from lib_log_fanout.domain.filtering import DEFAULT_MINIMUM_SEVERITY, SeverityFilter
from lib_log_fanout.domain.severity import Severity


def test_default_threshold_is_info() -> None:
    severity_filter = SeverityFilter()
    assert DEFAULT_MINIMUM_SEVERITY is Severity.INFO
    assert severity_filter.should_log(Severity.DEBUG) is False
    assert all(severity_filter.should_log(item) for item in Severity if item is not Severity.DEBUG)


@pytest.mark.parametrize(
    "severity, expected",
    [
        (Severity.DEBUG, False),
        (Severity.INFO, False),
        (Severity.LOG, False),
        (Severity.WARN, True),
        (Severity.ERROR, True),
    ],
)
def test_minimum_warn_accepts_warn_and_error(severity: Severity, expected: bool) -> None:
    assert SeverityFilter(minimum_severity=Severity.WARN).should_log(severity) is expected


@pytest.mark.parametrize("minimum", list(Severity) + [None])
def test_explicit_set_overrides_minimum(minimum: Severity | None) -> None:
    severity_filter = SeverityFilter(minimum_severity=minimum, severities=frozenset({Severity.DEBUG, Severity.ERROR}))
    accepted = {item for item in Severity if severity_filter.should_log(item)}
    assert accepted == {Severity.DEBUG, Severity.ERROR}


def test_empty_set_falls_back_to_threshold() -> None:
    severity_filter = SeverityFilter(minimum_severity=Severity.LOG, severities=frozenset())
    assert severity_filter.should_log(Severity.INFO) is False
    assert severity_filter.should_log(Severity.LOG) is True


def test_from_options_accepts_names() -> None:
    severity_filter = SeverityFilter.from_options(minimum_severity="warn", severities=["debug"])
    assert severity_filter.minimum_severity is Severity.WARN
    assert severity_filter.severities == frozenset({Severity.DEBUG})


def test_from_options_rejects_unknown_names() -> None:
    with pytest.raises(ValueError):
        SeverityFilter.from_options(minimum_severity="loud")


def test_filter_is_immutable() -> None:
    severity_filter = SeverityFilter()
    with pytest.raises(AttributeError):
        severity_filter.minimum_severity = Severity.ERROR  # type: ignore[misc]
