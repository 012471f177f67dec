import pytest

from logdancer import ReportingFilter, Severity


def test_default_filter_enables_everything():
    reporting = ReportingFilter()
    assert all(reporting.is_enabled(s) for s in Severity)
    assert reporting.is_enabled(12345)


def test_without_level_disables_only_that_level():
    reporting = ReportingFilter.all().without_level(Severity.NOTICE)
    assert not reporting.is_enabled(Severity.NOTICE)
    assert not reporting.is_enabled(8)
    assert reporting.is_enabled(Severity.WARNING)


def test_unknown_codes_follow_unknown_membership():
    reporting = ReportingFilter.only(Severity.ERROR)
    assert not reporting.is_enabled(99999)
    assert reporting.with_level(Severity.UNKNOWN).is_enabled(99999)


def test_none_disables_everything():
    assert not any(ReportingFilter.none().is_enabled(s) for s in Severity)


def test_from_names():
    reporting = ReportingFilter.from_names(["error", "WARNING"])
    assert reporting.levels == {Severity.ERROR, Severity.WARNING}


def test_from_names_rejects_unknown_names():
    with pytest.raises(ValueError):
        ReportingFilter.from_names(["ERROR", "LOUD"])


def test_from_bitmask():
    reporting = ReportingFilter.from_bitmask(Severity.ERROR | Severity.WARNING | Severity.DEPRECATED)
    assert reporting.levels == {Severity.ERROR, Severity.WARNING, Severity.DEPRECATED}
    assert not reporting.is_enabled(Severity.UNKNOWN)


def test_filters_are_immutable_values():
    base = ReportingFilter.only(Severity.ERROR)
    extended = base.with_level(Severity.NOTICE)
    assert base.levels == {Severity.ERROR}
    assert extended.levels == {Severity.ERROR, Severity.NOTICE}


def test_report_everything_mask_includes_unknown_codes():
    e_all = 32767
    reporting = ReportingFilter.from_bitmask(e_all)

    assert all(reporting.is_enabled(s) for s in Severity)
    assert reporting.is_enabled(99999)


def test_bits_outside_the_table_enable_unknown():
    reporting = ReportingFilter.from_bitmask(Severity.ERROR | 65536)

    assert reporting.levels == {Severity.ERROR, Severity.UNKNOWN}
    assert reporting.is_enabled(65536)
