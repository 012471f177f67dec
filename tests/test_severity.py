import pytest

from logdancer import Severity, label_for
from logdancer.severity import KNOWN_SEVERITIES, SEVERITY_LABELS, UNKNOWN_LABEL


def test_every_known_severity_has_a_label():
    assert KNOWN_SEVERITIES == set(Severity) - {Severity.UNKNOWN}
    for severity in KNOWN_SEVERITIES:
        assert label_for(severity) == SEVERITY_LABELS[severity]


@pytest.mark.parametrize(
    ("severity", "label"),
    [
        (Severity.PARSE_ERROR, "PARSING ERROR"),
        (Severity.CORE_WARNING, "CORE WARNING"),
        (Severity.STRICT_NOTICE, "STRICT NOTICE"),
        (Severity.USER_DEPRECATED, "USER DEPRECATED"),
    ],
)
def test_multi_word_labels(severity, label):
    assert severity.label == label


@pytest.mark.parametrize("code", [0, 3, -1, 32768, 99999])
def test_unknown_codes_use_fallback_label(code):
    assert Severity.from_code(code) is Severity.UNKNOWN
    assert label_for(code) == UNKNOWN_LABEL == "UNKNOWN ERROR TYPE"


def test_raw_codes_resolve_to_members():
    assert Severity.from_code(2) is Severity.WARNING
    assert label_for(8192) == "DEPRECATED"


def test_from_name_is_case_insensitive():
    assert Severity.from_name(" user_warning ") is Severity.USER_WARNING


def test_from_name_rejects_unknown_names():
    with pytest.raises(ValueError, match="Invalid severity"):
        Severity.from_name("FATAL")
